# svgtheme/io/walker.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Iterator, List

from svgtheme.errors import TraversalError


@dataclass(frozen=True)
class WalkEntry:
    path: Path       # logical path (root joined with rel_path)
    rel_path: Path
    is_symlink: bool
    is_dir: bool     # after following links when the walk follows them
    is_file: bool


def walk_tree(
    root: str | Path,
    follow_links: bool = False,
    exclude: AbstractSet[str] = frozenset(),
) -> Iterator[WalkEntry]:
    """
    Depth-first, pre-order walk below `root` (root itself is not yielded).
    Entries of one directory are visited in name order.

    follow_links=True descends into symlinked directories and classifies
    symlinks by their target; a broken link or a directory loop raises
    TraversalError. follow_links=False reports symlinks as themselves and
    never descends into them.

    Directories whose real path is in `exclude` are neither yielded nor
    entered.
    """
    root = Path(root)
    ancestors = [os.path.realpath(root)] if follow_links else []
    yield from _walk_dir(root, Path(), follow_links, ancestors, exclude)


def _walk_dir(
    directory: Path,
    rel: Path,
    follow_links: bool,
    ancestors: List[str],
    exclude: AbstractSet[str],
) -> Iterator[WalkEntry]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise TraversalError(f"{type(e).__name__}: {e}", path=directory) from e

    for entry in entries:
        path = Path(entry.path)
        rel_path = rel / entry.name

        try:
            is_link = entry.is_symlink()
            if follow_links and is_link and not os.path.exists(path):
                raise TraversalError("broken symbolic link", path=path)
            is_dir = entry.is_dir(follow_symlinks=follow_links)
            is_file = entry.is_file(follow_symlinks=follow_links)
        except OSError as e:
            raise TraversalError(f"{type(e).__name__}: {e}", path=path) from e

        if is_dir and exclude and os.path.realpath(path) in exclude:
            continue

        yield WalkEntry(
            path=path,
            rel_path=rel_path,
            is_symlink=is_link,
            is_dir=is_dir,
            is_file=is_file,
        )

        if not is_dir:
            continue

        if follow_links:
            real = os.path.realpath(path)
            if real in ancestors:
                raise TraversalError(f"filesystem loop back to '{real}'", path=path)
            yield from _walk_dir(path, rel_path, follow_links, ancestors + [real], exclude)
        else:
            yield from _walk_dir(path, rel_path, follow_links, ancestors, exclude)
