# svgtheme/io/preview_reader.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from svgtheme.errors import io_error


@dataclass(frozen=True)
class TextPreview:
    path: Path
    content: Optional[str]
    status: str  # ok | undecodable
    error_message: Optional[str] = None


def read_text_preview(path: str | Path) -> TextPreview:
    """
    Read the whole file as strict UTF-8.
    Invalid UTF-8 is reported as status=undecodable, not raised.
    Any other read failure raises IoError.
    """
    p = Path(path)

    try:
        raw = p.read_bytes()
    except OSError as e:
        raise io_error("read", p, e) from e

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        return TextPreview(
            path=p,
            content=None,
            status="undecodable",
            error_message=f"{type(e).__name__}: {e}",
        )

    return TextPreview(path=p, content=content, status="ok")
