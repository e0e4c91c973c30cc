# svgtheme/export/exporter.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from svgtheme.errors import AlreadyExists, HomeDirUnavailable, NotADirectory, io_error
from svgtheme.export.file_copier import copy_file, copy_symlink, ensure_dir, rewrite_text_file
from svgtheme.io.scanner import DEFAULT_EXTENSIONS, is_matching, norm_exts
from svgtheme.io.walker import walk_tree
from svgtheme.recolor.color_mapper import ColorMapping, apply_color_mappings

log = logging.getLogger(__name__)

ICONS_SUBDIR = Path(".local") / "share" / "icons"


@dataclass(frozen=True)
class ExportEntry:
    source: Path
    destination: Path
    action: str  # rewritten | copied | symlinked | directory


@dataclass
class ExportResult:
    output_dir: str
    matching_files_processed: int = 0
    other_files_copied: int = 0
    entries: List[ExportEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "output_dir": self.output_dir,
            "svgs_processed": self.matching_files_processed,
            "files_copied": self.other_files_copied,
        }


def default_install_root() -> Path:
    """~/.local/share/icons for the current user."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirUnavailable(f"could not determine home directory: {e}") from e
    if not str(home) or str(home) == "~":
        raise HomeDirUnavailable("could not determine home directory")
    return home / ICONS_SUBDIR


def _check_theme_name(theme_name: str) -> None:
    if not theme_name or theme_name in (".", "..") or "/" in theme_name or "\\" in theme_name:
        raise ValueError(f"theme name must be a single directory name, got {theme_name!r}")


def export_theme(
    source_dir: str | Path,
    theme_name: str,
    color_mappings: ColorMapping,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    install_root: Optional[str | Path] = None,
) -> ExportResult:
    """
    Mirror `source_dir` into <install_root>/<theme_name>.

    Matching files are rewritten through the color mappings, other files
    are copied byte-for-byte and symlinks are recreated (not followed).
    The output directory must not exist yet. On failure the partial output
    is left in place.
    """
    _check_theme_name(theme_name)

    source = Path(source_dir)
    if not source.is_dir():
        raise NotADirectory("not a directory", path=source_dir)

    root = Path(install_root).expanduser() if install_root is not None else default_install_root()
    output_dir = root / theme_name

    ensure_dir(root)
    try:
        output_dir.mkdir(exist_ok=False)
    except FileExistsError as e:
        raise AlreadyExists(f"theme '{theme_name}' already exists", path=output_dir) from e
    except OSError as e:
        raise io_error("mkdir", output_dir, e) from e

    exts = norm_exts(extensions)
    mappings = list(color_mappings)
    result = ExportResult(output_dir=str(output_dir))

    def recolor(content: str) -> str:
        return apply_color_mappings(content, mappings)

    # the output may sit inside the source tree (e.g. exporting from ~)
    skip = frozenset({os.path.realpath(output_dir)})

    for entry in walk_tree(source, follow_links=False, exclude=skip):
        dest_path = output_dir / entry.rel_path

        if entry.is_symlink:
            target = copy_symlink(entry.path, dest_path)
            action = "symlinked"
            log.debug("link %s -> %s", dest_path, target)
        elif entry.is_dir:
            ensure_dir(dest_path)
            action = "directory"
        elif not entry.is_file:
            # fifos, sockets, device nodes
            log.warning("skipping special file %s", entry.path)
            continue
        elif is_matching(entry.path, exts):
            rewrite_text_file(entry.path, dest_path, recolor)
            result.matching_files_processed += 1
            action = "rewritten"
            log.debug("rewrote %s", entry.rel_path)
        else:
            copy_file(entry.path, dest_path)
            result.other_files_copied += 1
            action = "copied"

        result.entries.append(ExportEntry(source=entry.path, destination=dest_path, action=action))

    log.info(
        "exported %s -> %s: %d rewritten, %d copied",
        source, output_dir, result.matching_files_processed, result.other_files_copied,
    )
    return result
