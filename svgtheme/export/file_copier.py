# svgtheme/export/file_copier.py
from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Callable

from svgtheme.errors import SymlinkUnsupported, io_error

_CAN_SYMLINK = os.name == "posix"


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise io_error("mkdir", path, e) from e


def copy_file(src: str | Path, dst: str | Path) -> Path:
    """Byte-for-byte copy; copy2 also keeps mode and mtime."""
    s = Path(src)
    d = Path(dst)
    ensure_dir(d.parent)
    try:
        shutil.copy2(s, d, follow_symlinks=False)
    except OSError as e:
        raise io_error("copy", s, e) from e
    return d


def rewrite_text_file(src: str | Path, dst: str | Path, transform: Callable[[str], str]) -> Path:
    """
    Read `src` as strict UTF-8, pass it through `transform`, write to `dst`.
    Line endings are kept as they are in the source.
    """
    s = Path(src)
    d = Path(dst)
    ensure_dir(d.parent)

    try:
        content = s.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise io_error("read", s, e) from e

    try:
        with d.open("w", encoding="utf-8", newline="") as f:
            f.write(transform(content))
    except OSError as e:
        raise io_error("write", d, e) from e
    return d


def copy_symlink(src: str | Path, dst: str | Path) -> str:
    """
    Recreate the link at `dst` with the same (unresolved) target.
    Broken links stay broken.
    """
    s = Path(src)
    d = Path(dst)
    if not _CAN_SYMLINK:
        raise SymlinkUnsupported("symbolic links can only be recreated on POSIX systems", path=s)

    try:
        target = os.readlink(s)
    except OSError as e:
        raise io_error("readlink", s, e) from e

    ensure_dir(d.parent)
    try:
        os.symlink(target, d)
    except OSError as e:
        raise io_error("symlink", d, e) from e
    return target
