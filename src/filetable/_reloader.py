"""Background polling loop that keeps the store in sync with its sources."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from enum import StrEnum
from pathlib import Path

from filetable.exceptions import FileTableLoadError
from filetable.loader import load_snapshot, stat_sources
from filetable.models import FileStamp, Snapshot
from filetable.store import GuardedStore


class LoopState(StrEnum):
    IDLE = "idle"
    SLEEPING = "sleeping"
    CHECKING = "checking"
    RELOADING = "reloading"
    STOPPED = "stopped"


class ReloadLoop:
    """Threaded poller that reloads the sources when their stamps change.

    Each tick compares the current stamps of the sources with the stamps of
    the last installed snapshot. On a difference, or when stamps cannot be
    observed at all, the sources are loaded again. A successful load is
    installed into the store; a failed one is logged and leaves both the
    store and the recorded stamps alone, so the next tick retries.
    """

    def __init__(
        self,
        *,
        paths: Sequence[Path],
        store: GuardedStore,
        interval: float,
        logger: logging.Logger | None = None,
        on_reload: Callable[[Snapshot], None] | None = None,
        name: str = "filetable-reloader",
    ) -> None:
        self._paths = tuple(paths)
        self._store = store
        self._interval = interval
        self._logger = logger or logging.getLogger(__name__)
        self._on_reload = on_reload
        self._name = name
        self._stamps: tuple[FileStamp | None, ...] | None = None
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._force = False
        self._thread: threading.Thread | None = None
        self._state = LoopState.IDLE

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether the polling thread is alive."""
        thread = self._thread
        return thread is not None and thread.is_alive()

    def prime(self, stamps: tuple[FileStamp | None, ...]) -> None:
        """Record the stamps of the snapshot currently installed."""
        self._stamps = stamps

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._wake.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name=self._name)
        self._thread.start()
        self._logger.debug("Reload loop started interval=%ss sources=%d", self._interval, len(self._paths))

    def stop(self, timeout: float | None = None) -> None:
        """Signal the thread to exit and wait for it."""
        self._stop.set()
        self._wake.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                self._logger.warning("Reload loop did not stop within %ss", timeout)
                return
        self._thread = None
        self._state = LoopState.STOPPED
        self._logger.debug("Reload loop stopped")

    def request_reload(self) -> None:
        """Force an unconditional reload on the next iteration."""
        self._force = True
        self._wake.set()

    def _run(self) -> None:
        while not self._stop.is_set():
            self._state = LoopState.SLEEPING
            self._wake.wait(self._interval)
            self._wake.clear()
            if self._stop.is_set():
                break
            force, self._force = self._force, False
            try:
                self.tick(force=force)
            except Exception:
                self._logger.exception("Unexpected error in reload loop")
        self._state = LoopState.STOPPED

    def tick(self, *, force: bool = False) -> bool:
        """Run one check; return ``True`` when a new snapshot was installed."""
        self._state = LoopState.CHECKING
        current = stat_sources(self._paths)
        if current is None:
            self._logger.debug("Source stamps unavailable, reloading unconditionally")
        elif not force and current == self._stamps:
            return False

        self._state = LoopState.RELOADING
        try:
            snapshot = load_snapshot(self._paths, logger=self._logger)
        except FileTableLoadError as exc:
            self._logger.error("Reload failed, keeping previous table: %s", exc)
            return False

        self._store.replace(snapshot)
        self._stamps = snapshot.stamps
        self._logger.info("Reloaded %d entries from %d source(s)", len(snapshot.entries), len(self._paths))

        if self._on_reload is not None:
            try:
                self._on_reload(snapshot)
            except Exception:
                self._logger.exception("Error in reload callback")
        return True
