from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from brand_registry.models import AliasCategory, SchemaEnumerations


logger = logging.getLogger(__name__)


def load_json_schema(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"JSON schema root must be a mapping: {p}")
    return data


def _dig(data: Any, path: list[str | int]) -> Any:
    node = data
    walked: list[str] = []
    for step in path:
        walked.append(str(step))
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                raise ValueError(f"JSON schema is missing {'.'.join(walked)}")
            node = node[step]
        else:
            if not isinstance(node, dict) or step not in node:
                raise ValueError(f"JSON schema is missing {'.'.join(walked)}")
            node = node[step]
    return node


def extract_license_types(schema: dict[str, Any]) -> tuple[str, ...]:
    values = _dig(schema, ["definitions", "brand", "properties", "license", "oneOf", 0, "properties", "type", "enum"])
    if not isinstance(values, list) or not values or not all(isinstance(v, str) for v in values):
        raise ValueError("JSON schema license type enum must be a non-empty list of strings")
    return tuple(values)


def _is_plain_name_list(prop: Any) -> bool:
    if not isinstance(prop, dict) or prop.get("type") != "array":
        return False
    items = prop.get("items")
    return isinstance(items, dict) and items.get("type") == "string"


def extract_alias_categories(schema: dict[str, Any]) -> tuple[AliasCategory, ...]:
    """Alias categories that hold plain lists of alternate names (e.g. `aka`, `old`).

    Structured categories such as duplicates or localized titles are skipped.
    """
    props = _dig(schema, ["definitions", "brand", "properties", "aliases", "properties"])
    if not isinstance(props, dict):
        raise ValueError("JSON schema aliases.properties must be a mapping")

    categories = tuple(
        AliasCategory(key=key, description=str(prop.get("description", "")))
        for key, prop in props.items()
        if _is_plain_name_list(prop)
    )
    if not categories:
        raise ValueError("JSON schema defines no plain alias categories")
    return categories


def load_schema_enumerations(path: str | Path) -> SchemaEnumerations:
    schema = load_json_schema(path)
    enums = SchemaEnumerations(
        license_types=extract_license_types(schema),
        alias_categories=extract_alias_categories(schema),
    )
    logger.info(
        "Loaded schema %s: %d license types, alias categories=%s",
        path,
        len(enums.license_types),
        [c.key for c in enums.alias_categories],
    )
    return enums
