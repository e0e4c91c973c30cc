from __future__ import annotations
from tabulate import tabulate

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd
import yaml

from svgtheme.config_loader import load_config
from svgtheme.errors import ThemeError
from svgtheme.export.exporter import ExportResult, export_theme
from svgtheme.io.scanner import ScanResult, scan_directory
from svgtheme.logging_setup import setup_logging
from svgtheme.recolor.mapping_loader import load_color_mappings, parse_color_mappings, parse_mapping_arg
from svgtheme.recolor.palette import extract_colors, extract_colors_from_multiple


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="svgtheme")
    p.add_argument("--config", default=None, help="Path to YAML settings")
    p.add_argument("--log-level", default=None, help="Override logging.level")
    p.add_argument("--log-file", default=None, help="Override logging.file")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("scan", help="Count SVG files and preview the largest ones")
    s.add_argument("path", nargs="?", default=None, help="Override source_dir")
    s.add_argument("--ext", action="append", default=None, help="Override extensions (repeatable)")
    s.add_argument("--limit", type=int, default=None, help="Override preview.limit")

    e = sub.add_parser("export", help="Install a recolored copy as an icon theme")
    e.add_argument("source", nargs="?", default=None, help="Override source_dir")
    e.add_argument("--theme", default=None, help="Override theme_name")
    e.add_argument("--map", action="append", default=None, metavar="FROM=TO",
                   help="Color mapping, applied after configured ones (repeatable)")
    e.add_argument("--mappings", default=None, help="Override mappings_file")
    e.add_argument("--install-root", default=None, help="Override install_root")
    e.add_argument("--ext", action="append", default=None, help="Override extensions (repeatable)")
    e.add_argument("--manifest", default=None, help="Write a CSV of every exported entry")
    return p.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    o: Dict[str, Any] = {}

    if args.log_level is not None:
        o.setdefault("logging", {})
        o["logging"]["level"] = args.log_level

    if args.log_file is not None:
        o.setdefault("logging", {})
        o["logging"]["file"] = args.log_file

    if args.ext:
        o["extensions"] = list(args.ext)

    if args.command == "scan":
        if args.path is not None:
            o["source_dir"] = args.path
        if args.limit is not None:
            o.setdefault("preview", {})
            o["preview"]["limit"] = args.limit

    if args.command == "export":
        if args.source is not None:
            o["source_dir"] = args.source
        if args.theme is not None:
            o["theme_name"] = args.theme
        if args.mappings is not None:
            o["mappings_file"] = args.mappings
        if args.install_root is not None:
            o["install_root"] = args.install_root

    return o


def _resolve_mappings(cfg: Dict[str, Any], cli_maps: Optional[List[str]]) -> List[Tuple[str, str]]:
    # config inline pairs, then the mappings file, then --map flags
    mappings = parse_color_mappings(cfg.get("color_mappings"))
    if cfg.get("mappings_file"):
        mappings.extend(load_color_mappings(cfg["mappings_file"]))
    for arg in cli_maps or []:
        mappings.append(parse_mapping_arg(arg))
    return mappings


def print_scan_summary(result: ScanResult) -> None:
    print(f"Source: {result.source_dir}")
    print(f"SVG files: {result.total_matching_count}")
    print(f"Other files: {result.non_matching_count}")

    if not result.preview_items:
        print("\nNo previewable SVG files.")
        return

    view = pd.DataFrame(
        [
            {
                "path": item.path,
                "size_bytes": item.size_bytes,
                "colors": len(extract_colors(item.content)),
            }
            for item in result.preview_items
        ]
    )
    print("\nPreview (largest first):")
    print(tabulate(view, headers="keys", tablefmt="psql", showindex=False))

    palette = extract_colors_from_multiple(item.content for item in result.preview_items)
    print(f"\nPalette ({len(palette)} colors, darkest first):")
    print(" ".join(palette) if palette else "-")


def write_manifest(result: ExportResult, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    manifest_df = pd.DataFrame(
        [
            {
                "src_path": str(e.source),
                "dst_path": str(e.destination),
                "action": e.action,
            }
            for e in result.entries
        ],
        columns=["src_path", "dst_path", "action"],
    )
    manifest_df.to_csv(out, index=False)
    return out


def print_export_summary(result: ExportResult, mappings: List[Tuple[str, str]]) -> None:
    print(f"Output: {result.output_dir}")
    print(f"SVG files recolored: {result.matching_files_processed}")
    print(f"Other files copied: {result.other_files_copied}")
    if mappings:
        print("\nColor mappings:")
        print(tabulate(mappings, headers=["from", "to"], tablefmt="psql"))


def run_scan(cfg: Dict[str, Any]) -> ScanResult:
    result = scan_directory(
        cfg["source_dir"],
        extensions=cfg["extensions"],
        preview_limit=int(cfg["preview"]["limit"]),
    )
    print_scan_summary(result)
    return result


def run_export(cfg: Dict[str, Any], cli_maps: Optional[List[str]], manifest: Optional[str]) -> ExportResult:
    theme_name = cfg.get("theme_name")
    if not theme_name:
        raise ValueError("theme_name is required (use --theme or set it in the config)")

    mappings = _resolve_mappings(cfg, cli_maps)
    result = export_theme(
        cfg["source_dir"],
        str(theme_name),
        mappings,
        extensions=cfg["extensions"],
        install_root=cfg.get("install_root"),
    )
    print_export_summary(result, mappings)

    if manifest:
        print(f"Wrote: {write_manifest(result, manifest)}")
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        cfg = load_config(args.config, overrides=_build_overrides(args))
        setup_logging(cfg["logging"]["level"], cfg["logging"]["file"])

        if args.command == "scan":
            run_scan(cfg)
        else:
            run_export(cfg, args.map, args.manifest)
    except (ThemeError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
