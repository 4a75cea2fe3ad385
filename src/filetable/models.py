"""Immutable snapshot models.

A :class:`Snapshot` is what the loader produces and what the store holds.
It is never modified after construction; a reload builds a new one.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileStamp(BaseModel):
    """Observed identity of a source file at one point in time.

    Two stamps compare equal when the file was (most likely) not touched in
    between. ``inode`` catches editors that replace the file by renaming a
    new one over it; ``size`` catches writes within the filesystem's
    timestamp granularity.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mtime_ns: int
    size: int
    inode: int = 0

    @classmethod
    def from_stat(cls, st: os.stat_result) -> FileStamp:
        return cls(mtime_ns=st.st_mtime_ns, size=st.st_size, inode=st.st_ino)


class Snapshot(BaseModel):
    """A merged key/value table plus the stamps of the files it came from.

    ``entries`` is a read-only view over a private copy of the input, so
    neither the loader nor any reader can change an installed table.
    ``stamps`` is aligned with the configured source paths; ``None`` marks a
    source that was absent when the snapshot was taken.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    entries: Mapping[str, str] = Field(default_factory=dict)
    stamps: tuple[FileStamp | None, ...] = ()
    loaded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("entries", mode="after")
    @classmethod
    def _freeze_entries(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @property
    def is_empty(self) -> bool:
        return not self.entries
