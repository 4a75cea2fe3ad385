"""Custom exception hierarchy for filetable."""

from __future__ import annotations

import os


class FileTableError(Exception):
    """Base exception for all filetable errors."""


class FileTableConfigError(FileTableError):
    """Invalid or missing configuration."""


class FileTableLoadError(FileTableError):
    """A snapshot of the source files could not be produced."""

    def __init__(self, message: str, *, path: str | os.PathLike[str] = "") -> None:
        self.path = os.fspath(path)
        super().__init__(message)


class FileTableParseError(FileTableLoadError):
    """A source line does not follow the table line format.

    Raised by the line parser without location information; the snapshot
    loader re-raises it with ``path`` and ``lineno`` filled in.
    """

    def __init__(
        self,
        reason: str,
        *,
        line: str = "",
        path: str | os.PathLike[str] = "",
        lineno: int = 0,
    ) -> None:
        self.reason = reason
        self.line = line
        self.lineno = lineno
        location = f"{os.fspath(path)}:{lineno}: " if path else ""
        super().__init__(f"{location}{reason}: {line!r}", path=path)


class FileTableReadError(FileTableLoadError):
    """A source file exists but could not be read or decoded."""
