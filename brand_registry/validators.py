from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from brand_registry.normalization import HEX_PATTERN, is_secure_url, title_to_slug


logger = logging.getLogger(__name__)

REQUIRED = "This field is required"
TITLE_TAKEN = "This brand title or slug already exists"
BAD_HEX = "This should be a valid hex code"
BAD_URL = "This should be a secure URL"
EMPTY_ALIASES = "Enter at least one alias (separate with commas)"


def validate_title(text: str, existing: Iterable[Mapping[str, Any]]) -> Optional[str]:
    if not (text or "").strip():
        return REQUIRED
    slug = title_to_slug(text)
    for entry in existing:
        other = entry.get("title", "")
        taken = {title_to_slug(other)}
        if isinstance(entry.get("slug"), str):
            taken.add(entry["slug"])
        if other == text or slug in taken:
            logger.debug("Title %r collides with existing %r", text, other)
            return TITLE_TAKEN
    return None


def validate_hex(text: str) -> Optional[str]:
    return None if HEX_PATTERN.match(text or "") else BAD_HEX


def validate_url(text: str) -> Optional[str]:
    return None if is_secure_url(text) else BAD_URL


def validate_optional_url(text: str) -> Optional[str]:
    if not text:
        return None
    return validate_url(text)


def split_alias_list(text: str) -> list[str]:
    return [x.strip() for x in (text or "").split(",") if x.strip()]


def validate_alias_list(text: str) -> Optional[str]:
    if not (text or "").strip():
        return REQUIRED
    if not split_alias_list(text):
        return EMPTY_ALIASES
    return None


def filter_license_types(types: Sequence[str], query: str) -> list[str]:
    q = (query or "").strip().lower()
    if not q:
        return list(types)
    return [t for t in types if q in t.lower()]
