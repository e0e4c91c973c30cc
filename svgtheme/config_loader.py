# svgtheme/config_loader.py
from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Optional
import yaml


DEFAULTS: Dict[str, Any] = {
    "source_dir": ".",
    "theme_name": None,
    "extensions": [".svg"],
    "preview": {
        "limit": 5,
    },
    "install_root": None,      # None -> ~/.local/share/icons
    "color_mappings": [],
    "mappings_file": None,
    "logging": {
        "level": "WARNING",
        "file": None,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(
    path: Optional[str | Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Defaults <- settings YAML (if a path is given) <- overrides.
    """
    cfg: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config not found: {p}")

        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError("settings.yaml root must be a mapping (dict).")

        cfg = _deep_merge(cfg, data)

    if overrides:
        cfg = _deep_merge(cfg, overrides)

    return cfg
