"""Snapshot loader: read every source file and merge it into one table."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from filetable._constants import FILE_ENCODING
from filetable.exceptions import FileTableParseError, FileTableReadError
from filetable.models import FileStamp, Snapshot
from filetable.parser import iter_entries

_logger = logging.getLogger(__name__)


def _read_source(path: Path, entries: dict[str, str]) -> FileStamp | None:
    """Merge the entries of *path* into *entries*.

    Returns the stamp of the file that was read, or ``None`` when the file
    does not exist.
    """
    try:
        handle = path.open(encoding=FILE_ENCODING)
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise FileTableReadError(f"{path}: cannot open: {exc.strerror or exc}", path=path) from exc

    with handle:
        try:
            stamp = FileStamp.from_stat(os.fstat(handle.fileno()))
            for _lineno, entry in iter_entries(handle):
                entries[entry.key] = entry.value
        except FileTableParseError as exc:
            raise FileTableParseError(exc.reason, line=exc.line, path=path, lineno=exc.lineno) from exc
        except OSError as exc:
            raise FileTableReadError(f"{path}: cannot read: {exc.strerror or exc}", path=path) from exc
        except UnicodeDecodeError as exc:
            raise FileTableReadError(f"{path}: cannot read: {exc}", path=path) from exc
    return stamp


def load_snapshot(
    paths: Iterable[str | os.PathLike[str]],
    *,
    logger: logging.Logger | None = None,
) -> Snapshot:
    """Read *paths* in order and merge their entries.

    Later files, and later lines within a file, overwrite earlier values for
    the same key. A missing file contributes nothing. Any parse or read
    failure aborts the whole load; nothing partial is ever returned.

    Raises
    ------
    FileTableParseError
        A line does not follow the table line format.
    FileTableReadError
        A file exists but could not be read or decoded.
    """
    log = logger or _logger
    entries: dict[str, str] = {}
    stamps: list[FileStamp | None] = []
    for raw in paths:
        path = Path(raw)
        stamp = _read_source(path, entries)
        if stamp is None:
            log.debug("Source %s is absent, contributing no entries", path)
        stamps.append(stamp)
    return Snapshot(entries=entries, stamps=tuple(stamps))


def stat_sources(paths: Sequence[str | os.PathLike[str]]) -> tuple[FileStamp | None, ...] | None:
    """Observe the current stamps of *paths* without reading them.

    A missing file yields ``None`` in its slot. When any file cannot be
    stat'ed for another reason, modification tracking is unavailable and the
    whole result is ``None``.
    """
    stamps: list[FileStamp | None] = []
    for raw in paths:
        try:
            st = os.stat(raw)
        except FileNotFoundError:
            stamps.append(None)
        except OSError:
            return None
        else:
            stamps.append(FileStamp.from_stat(st))
    return tuple(stamps)
