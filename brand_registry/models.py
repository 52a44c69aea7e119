from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from brand_registry.normalization import is_secure_url
from schemas.base import SchemaBase


def _require_secure_url(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_secure_url(value):
        raise ValueError(f"not a secure URL: {value!r}")
    return value


class License(SchemaBase):
    type: str = Field(..., min_length=1)
    url: Optional[str] = None

    @field_validator("url")
    @classmethod
    def url_is_secure(cls, v: Optional[str]) -> Optional[str]:
        return _require_secure_url(v)


class BrandRecord(SchemaBase):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    title: str = Field(..., min_length=1)
    hex: str = Field(..., pattern=r"^[0-9A-F]{6}$")
    source: str
    guidelines: Optional[str] = None
    license: Optional[License] = None
    aliases: Optional[Dict[str, List[str]]] = None

    @field_validator("source", "guidelines")
    @classmethod
    def urls_are_secure(cls, v: Optional[str]) -> Optional[str]:
        return _require_secure_url(v)

    @field_validator("aliases")
    @classmethod
    def aliases_non_empty(cls, v: Optional[Dict[str, List[str]]]) -> Optional[Dict[str, List[str]]]:
        if v is None:
            return v
        if not v:
            raise ValueError("aliases must be omitted rather than empty")
        for key, names in v.items():
            if not names or any(not n.strip() or n != n.strip() for n in names):
                raise ValueError(f"aliases.{key} must be a non-empty list of trimmed names")
        return v


@dataclass(frozen=True)
class AliasCategory:
    key: str
    description: str


@dataclass(frozen=True)
class SchemaEnumerations:
    license_types: tuple[str, ...]
    alias_categories: tuple[AliasCategory, ...]


@dataclass
class AnswerSet:
    """Answers collected by one prompt session. Gated fields stay None when their gate is off."""

    title: Optional[str] = None
    hex: Optional[str] = None
    source: Optional[str] = None

    has_guidelines: Optional[bool] = None
    guidelines: Optional[str] = None

    has_license: Optional[bool] = None
    license_type: Optional[str] = None
    license_url: Optional[str] = None

    has_aliases: Optional[bool] = None
    alias_categories: list[str] = field(default_factory=list)
    # category key -> raw comma-separated input
    alias_lists: dict[str, str] = field(default_factory=dict)

    confirmed: Optional[bool] = None
