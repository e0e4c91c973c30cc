# svgtheme/io/scanner.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Set, Tuple

from svgtheme.errors import NotADirectory, io_error
from svgtheme.io.preview_reader import read_text_preview
from svgtheme.io.walker import walk_tree

log = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".svg",)
PREVIEW_LIMIT = 5


@dataclass(frozen=True)
class PreviewItem:
    path: str
    size_bytes: int
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "size": self.size_bytes, "content": self.content}


@dataclass(frozen=True)
class ScanResult:
    source_dir: str
    preview_items: Tuple[PreviewItem, ...] = field(default_factory=tuple)
    total_matching_count: int = 0
    non_matching_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_dir": self.source_dir,
            "preview_svgs": [p.to_dict() for p in self.preview_items],
            "total_svg_count": self.total_matching_count,
            "non_svg_count": self.non_matching_count,
        }


def norm_exts(exts: Sequence[str]) -> set[str]:
    out = set()
    for e in exts:
        e = e.strip()
        if not e:
            continue
        out.add(e.lower() if e.startswith(".") else f".{e.lower()}")
    return out


def is_matching(path: Path, exts: set[str]) -> bool:
    return path.suffix.lower() in exts


def scan_directory(
    path: str | Path,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    preview_limit: int = PREVIEW_LIMIT,
) -> ScanResult:
    """
    Recursively scan `path` (following symlinks) for matching files.

    Matching files reachable through several symlinks are counted once,
    keyed by their canonical path. The `preview_limit` largest distinct
    files are read as UTF-8 for preview; files that do not decode are
    left out of the preview but still counted.
    """
    root = Path(path)
    if not root.is_dir():
        raise NotADirectory("not a directory", path=path)

    exts = norm_exts(extensions)
    seen_canonical: Set[str] = set()
    matching: List[Tuple[Path, int]] = []
    non_matching_count = 0

    for entry in walk_tree(root, follow_links=True):
        if not entry.is_file:
            continue

        if not is_matching(entry.path, exts):
            non_matching_count += 1
            continue

        try:
            canonical = os.path.realpath(entry.path, strict=True)
        except OSError as e:
            raise io_error("canonicalize", entry.path, e) from e

        if canonical in seen_canonical:
            log.debug("skip alias %s -> %s", entry.path, canonical)
            continue
        seen_canonical.add(canonical)

        try:
            size = entry.path.stat().st_size
        except OSError as e:
            raise io_error("metadata", entry.path, e) from e

        matching.append((entry.path, int(size)))

    total_matching_count = len(matching)

    # sorted() is stable: equal sizes keep encounter order
    largest = sorted(matching, key=lambda x: x[1], reverse=True)[:max(preview_limit, 0)]

    previews: List[PreviewItem] = []
    for p, size in largest:
        prev = read_text_preview(p)
        if prev.status != "ok":
            log.debug("preview skipped for %s (%s)", p, prev.error_message)
            continue
        previews.append(PreviewItem(path=str(p), size_bytes=size, content=prev.content or ""))

    log.info(
        "scanned %s: %d matching, %d other, %d previews",
        root, total_matching_count, non_matching_count, len(previews),
    )

    return ScanResult(
        source_dir=str(path),
        preview_items=tuple(previews),
        total_matching_count=total_matching_count,
        non_matching_count=non_matching_count,
    )
