from __future__ import annotations

import json
from typing import Any

from rich.text import Text

from brand_registry.normalization import HEX_PATTERN, normalize_color


def relative_luminance(color: str) -> float:
    """WCAG relative luminance of a six-digit hex color (no `#`)."""

    def channel(hex_pair: str) -> float:
        c = int(hex_pair, 16) / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(color[i : i + 2]) for i in (0, 2, 4))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def hex_preview(text: str) -> Text:
    label = (text or "").upper()
    if not HEX_PATTERN.match(text or ""):
        return Text(label)
    color = normalize_color(text)
    fg = "#ffffff" if relative_luminance(color) < 0.4 else "#000000"
    return Text(f" {label} ", style=f"{fg} on #{color.lower()}")


def aliases_preview(text: str) -> Text:
    out = Text()
    for i, part in enumerate((text or "").split(",")):
        if i:
            out.append(",")
        out.append(part, style="cyan")
    return out


def record_preview(record: dict[str, Any], data_label: str) -> Text:
    out = Text(f"About to write the following to {data_label}:\n\n", style="bold")
    out.append(json.dumps(record, indent=4, ensure_ascii=False))
    out.append("\n")
    return out
