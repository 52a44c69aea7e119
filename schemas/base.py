from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class SchemaBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-ready dict; optional fields left unset are omitted, never emitted as null."""
        return self.model_dump(mode="json", exclude_none=True)
