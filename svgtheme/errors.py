# svgtheme/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Optional


class ThemeError(Exception):
    """
    Base class for scan/export failures.
    Every error is terminal for the call that raised it.
    """

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        operation: Optional[str] = None,
    ) -> None:
        self.message = message
        self.path = str(path) if path is not None else None
        self.operation = operation
        super().__init__(self._format())

    def _format(self) -> str:
        parts = []
        if self.operation:
            parts.append(f"{self.operation} failed")
        if self.path:
            parts.append(f"'{self.path}'")
        prefix = " ".join(parts)
        return f"{prefix}: {self.message}" if prefix else self.message


class NotADirectory(ThemeError):
    pass


class TraversalError(ThemeError):
    pass


class IoError(ThemeError):
    """Read/write/copy/canonicalize/metadata failure on a specific path."""


class AlreadyExists(ThemeError):
    pass


class HomeDirUnavailable(ThemeError):
    pass


class SymlinkUnsupported(ThemeError):
    pass


def io_error(operation: str, path: str | Path, exc: BaseException) -> IoError:
    return IoError(f"{type(exc).__name__}: {exc}", path=path, operation=operation)
