from __future__ import annotations

import re
import unicodedata
from functools import lru_cache
from urllib.parse import urlparse

from pyuca import Collator


URL_PATTERN = re.compile(r"^https://[^\s\"']+$")
HEX_PATTERN = re.compile(r"^#?(?:[0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)

_SLUG_REPLACEMENTS = {
    "+": "plus",
    ".": "dot",
    "&": "and",
    "đ": "d",
    "ħ": "h",
    "ı": "i",
    "ĸ": "k",
    "ŀ": "l",
    "ł": "l",
    "ß": "ss",
    "ŧ": "t",
    "ø": "o",
}
_SLUG_REPLACEMENTS_RE = re.compile("|".join(re.escape(k) for k in _SLUG_REPLACEMENTS))


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def title_to_slug(title: str) -> str:
    """Canonical comparison form of a brand title.

    Lowercases, spells out `+ . &`, folds a handful of letters NFD cannot
    decompose, strips diacritics and drops anything outside [a-z0-9].
    """
    s = (title or "").lower()
    s = _SLUG_REPLACEMENTS_RE.sub(lambda m: _SLUG_REPLACEMENTS[m.group(0)], s)
    s = _strip_accents(s)
    return re.sub(r"[^a-z0-9]", "", s)


def normalize_color(text: str) -> str:
    """Six uppercase hex digits, no `#`. Shorthand is expanded and alpha is dropped."""
    color = (text or "").replace("#", "").upper()
    if len(color) < 6:
        color = "".join(ch * 2 for ch in color[:3])
    elif len(color) > 6:
        color = color[:6]
    return color


def is_secure_url(text: str) -> bool:
    if not URL_PATTERN.match(text or ""):
        return False
    return bool(urlparse(text).netloc)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def collation_key(title: str) -> tuple:
    """Unicode Collation Algorithm sort key; the raw title breaks exact ties."""
    return (_collator().sort_key(title or ""), title or "")
