# svgtheme/recolor/color_mapper.py
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

ColorMapping = Sequence[Tuple[str, str]]

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def replace_color_insensitive(content: str, original: str, replacement: str) -> str:
    """
    Replace every case-insensitive occurrence of `original` with `replacement`.

    A match directly followed by another hex digit is left alone, so
    searching for "#aabbcc" does not eat the front of "#aabbccdd".
    Only the character after the match is checked.
    """
    if not original:
        return content

    pieces: List[str] = []
    last = 0
    for m in re.finditer(re.escape(original), content, flags=re.IGNORECASE):
        start, end = m.span()
        if end < len(content) and content[end] in _HEX_DIGITS:
            continue
        pieces.append(content[last:start])
        pieces.append(replacement)
        last = end
    pieces.append(content[last:])
    return "".join(pieces)


def to_short_hex(color: str) -> Optional[str]:
    """
    "#aabbcc" -> "#abc" when every channel repeats its digit, else None.
    Digits are compared as written, so "#AaBbCc" has no short form.
    """
    if len(color) != 7 or not color.startswith("#"):
        return None
    digits = color[1:]
    if any(ch not in _HEX_DIGITS for ch in digits):
        return None
    pairs = [digits[i:i + 2] for i in (0, 2, 4)]
    if any(p[0] != p[1] for p in pairs):
        return None
    return "#" + "".join(p[0] for p in pairs)


def apply_color_mapping(content: str, original: str, replacement: str) -> str:
    # long form first, then the #RGB shorthand when one exists
    result = replace_color_insensitive(content, original, replacement)

    short_original = to_short_hex(original)
    if short_original:
        short_replacement = to_short_hex(replacement) or replacement
        result = replace_color_insensitive(result, short_original, short_replacement)

    return result


def apply_color_mappings(content: str, mappings: ColorMapping) -> str:
    """
    Apply (original, replacement) pairs in order. Each pair runs over the
    output of the previous one, so chained mappings compound.
    """
    result = content
    for original, replacement in mappings:
        result = apply_color_mapping(result, original, replacement)
    return result
