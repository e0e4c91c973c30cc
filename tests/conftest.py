"""Shared fixtures: small icon trees under tmp_path."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest


def svg(fill: str = "#aabbcc", padding: int = 0) -> str:
    body = " " * padding
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="16" height="16">'
        f'<rect fill="{fill}" width="16" height="16"/>{body}</svg>\n'
    )


requires_symlinks = pytest.mark.skipif(os.name != "posix", reason="POSIX symlinks only")


@pytest.fixture
def write_file() -> Callable[..., Path]:
    def _write(path: Path, content: str | bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def icon_tree(tmp_path: Path, write_file) -> Path:
    """
    icons/
      apps/firefox.svg
      apps/terminal.SVG
      places/folder.svg
      places/folder.png
      index.theme
    """
    root = tmp_path / "icons"
    write_file(root / "apps" / "firefox.svg", svg("#aabbcc", padding=200))
    write_file(root / "apps" / "terminal.SVG", svg("#abc", padding=100))
    write_file(root / "places" / "folder.svg", svg("#112233"))
    write_file(root / "places" / "folder.png", b"\x89PNG\r\n\x1a\n\x00\x01\x02\xff")
    write_file(root / "index.theme", "[Icon Theme]\nName=Test\n")
    return root


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    return tmp_path / "share" / "icons"
