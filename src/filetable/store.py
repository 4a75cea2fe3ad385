"""Lock-guarded holder of the active snapshot.

This is the only object readers touch. The snapshot it holds is immutable;
the reload loop installs a new one with :meth:`GuardedStore.replace`.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from filetable.models import Snapshot


class ReadWriteLock:
    """Writer-preferring reader/writer lock.

    Any number of readers may hold the lock together. A waiting writer
    blocks new readers so a steady stream of lookups cannot starve a reload.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class GuardedStore:
    """The current :class:`Snapshot` behind a reader/writer lock."""

    def __init__(self, snapshot: Snapshot | None = None) -> None:
        self._lock = ReadWriteLock()
        self._snapshot = snapshot if snapshot is not None else Snapshot()

    def get(self, key: str, default: str | None = None) -> str | None:
        with self._lock.read_locked():
            return self._snapshot.entries.get(key, default)

    def lookup(self, key: str) -> tuple[str, bool]:
        """Return ``(value, found)``; ``value`` is ``""`` when not found."""
        with self._lock.read_locked():
            entries = self._snapshot.entries
            if key in entries:
                return entries[key], True
        return "", False

    def snapshot(self) -> Snapshot:
        with self._lock.read_locked():
            return self._snapshot

    def replace(self, snapshot: Snapshot) -> None:
        """Install *snapshot* as the active table."""
        with self._lock.write_locked():
            self._snapshot = snapshot

    def __contains__(self, key: object) -> bool:
        with self._lock.read_locked():
            return key in self._snapshot.entries

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._snapshot.entries)
