# svgtheme/recolor/palette.py
from __future__ import annotations

import re
from typing import Dict, Iterable, List

# Inkscape/Sodipodi editor state and metadata carry colors that are not drawn
_NAMEDVIEW_SELF_CLOSING = re.compile(r"<sodipodi:namedview[^>]*?/>", re.DOTALL)
_NAMEDVIEW_BLOCK = re.compile(r"<sodipodi:namedview.*?</sodipodi:namedview>", re.DOTALL)
_METADATA_BLOCK = re.compile(r"<metadata.*?</metadata>", re.DOTALL)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![0-9a-fA-F])")


def normalize_hex(color: str) -> str:
    """Lowercase, expanding #rgb to #rrggbb."""
    c = color.strip().lower()
    if len(c) == 4:
        r, g, b = c[1], c[2], c[3]
        return f"#{r}{r}{g}{g}{b}{b}"
    return c


def luminance(color: str) -> float:
    c = normalize_hex(color)
    r = int(c[1:3], 16)
    g = int(c[3:5], 16)
    b = int(c[5:7], 16)
    return 0.299 * r + 0.587 * g + 0.114 * b


def strip_editor_metadata(content: str) -> str:
    cleaned = _NAMEDVIEW_SELF_CLOSING.sub("", content)
    cleaned = _NAMEDVIEW_BLOCK.sub("", cleaned)
    return _METADATA_BLOCK.sub("", cleaned)


def extract_colors(content: str) -> List[str]:
    """
    Distinct hex colors drawn in one SVG document, darkest first.
    """
    return extract_colors_from_multiple([content])


def extract_colors_from_multiple(contents: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for content in contents:
        for m in _HEX_COLOR.finditer(strip_editor_metadata(content)):
            seen.setdefault(normalize_hex(m.group(0)), None)
    return sorted(seen, key=luminance)
