# svgtheme/recolor/mapping_loader.py
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, List, Tuple

import yaml

from svgtheme.recolor.palette import normalize_hex

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def normalize_color(value: Any) -> str:
    """
    Validate one mapping color and return it as lowercase #rrggbb.
    """
    if not isinstance(value, str):
        raise ValueError(f"color must be a string like '#aabbcc', got {value!r}")
    s = value.strip()
    if not _HEX_COLOR.match(s):
        raise ValueError(f"invalid hex color: {value!r} (expected #rgb or #rrggbb)")
    return normalize_hex(s)


def parse_color_mappings(data: Any) -> List[Tuple[str, str]]:
    """
    Accepted shapes (order is kept):
      - [["#aabbcc", "#112233"], ...]
      - [{"original": "#aabbcc", "replacement": "#112233"}, ...]
      - {"#aabbcc": "#112233", ...}
    """
    if data is None:
        return []

    if isinstance(data, dict):
        items = list(data.items())
    elif isinstance(data, list):
        items = []
        for i, item in enumerate(data):
            if isinstance(item, dict):
                if "original" not in item or "replacement" not in item:
                    raise ValueError(
                        f"color_mappings[{i}] needs 'original' and 'replacement' keys"
                    )
                items.append((item["original"], item["replacement"]))
            elif isinstance(item, (list, tuple)) and len(item) == 2:
                items.append((item[0], item[1]))
            else:
                raise ValueError(f"color_mappings[{i}] must be a pair, got {item!r}")
    else:
        raise ValueError("color_mappings must be a list of pairs or a mapping")

    return [(normalize_color(a), normalize_color(b)) for a, b in items]


def parse_mapping_arg(arg: str) -> Tuple[str, str]:
    """CLI form: "#aabbcc=#112233"."""
    original, sep, replacement = arg.partition("=")
    if not sep:
        raise ValueError(f"mapping must look like FROM=TO, got {arg!r}")
    return normalize_color(original), normalize_color(replacement)


def load_color_mappings(path: str | Path) -> List[Tuple[str, str]]:
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"Color mappings file not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    # allow either the bare list/mapping or {color_mappings: ...}
    if isinstance(data, dict) and "color_mappings" in data:
        data = data["color_mappings"]
    return parse_color_mappings(data)
