"""File-backed lookup table with background reload."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from filetable._constants import DEFAULT_RELOAD_INTERVAL, DEFAULT_TABLE_NAME
from filetable._reloader import ReloadLoop
from filetable.config import FileTableConfig
from filetable.exceptions import FileTableError
from filetable.loader import load_snapshot
from filetable.models import Snapshot
from filetable.store import GuardedStore

_logger = logging.getLogger(__name__)


class FileTable:
    """Key/value table read from text files and kept in sync with them.

    Usage::

        with FileTable(FileTableConfig(paths=("aliases",))) as table:
            value, found = table.lookup("postmaster@example.org")

    Construction only validates the configuration. :meth:`init` loads the
    sources once, synchronously, and starts the reload loop; any load
    failure there is raised and nothing is started. Afterwards, failed
    reloads are logged and the previous table stays in place, while a
    deleted source simply stops contributing entries.
    """

    def __init__(
        self,
        config: FileTableConfig,
        *,
        logger: logging.Logger | None = None,
        on_reload: Callable[[Snapshot], None] | None = None,
    ) -> None:
        self._config = config
        self._logger = logger or _logger
        self._on_reload = on_reload
        self._store = GuardedStore()
        self._reloader: ReloadLoop | None = None

    @classmethod
    def from_paths(
        cls,
        *paths: str | os.PathLike[str],
        reload_interval: float = DEFAULT_RELOAD_INTERVAL,
        name: str = DEFAULT_TABLE_NAME,
        logger: logging.Logger | None = None,
    ) -> FileTable:
        config = FileTableConfig(paths=tuple(Path(p) for p in paths), reload_interval=reload_interval, name=name)
        return cls(config, logger=logger)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> FileTable:
        self.init()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def init(self) -> None:
        """Load the sources and start watching them."""
        if self._reloader is not None:
            raise FileTableError(f"{self.name}: table already initialized")

        snapshot = load_snapshot(self._config.paths, logger=self._logger)
        for path, stamp in zip(self._config.paths, snapshot.stamps, strict=True):
            if stamp is None:
                self._logger.warning("%s: ignoring non-existent file %s", self.name, path)
        self._store.replace(snapshot)
        self._logger.info("%s: loaded %d entries", self.name, len(snapshot.entries))

        reloader = ReloadLoop(
            paths=self._config.paths,
            store=self._store,
            interval=self._config.reload_interval,
            logger=self._logger,
            on_reload=self._on_reload,
            name=f"{self.name}-reloader",
        )
        reloader.prime(snapshot.stamps)
        reloader.start()
        self._reloader = reloader

    def close(self) -> None:
        """Stop the reload loop and wait until it has exited."""
        reloader = self._reloader
        self._reloader = None
        if reloader is not None:
            reloader.stop()

    def reload(self) -> None:
        """Ask the reload loop to re-read the sources now, changed or not."""
        if self._reloader is None:
            raise FileTableError(f"{self.name}: table not initialized, call init() first")
        self._reloader.request_reload()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup(self, key: str) -> tuple[str, bool]:
        """Return ``(value, found)`` for *key*."""
        return self._store.lookup(key)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._store.get(key, default)

    def snapshot(self) -> Snapshot:
        """Return the currently installed snapshot."""
        return self._store.snapshot()

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> FileTableConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def paths(self) -> tuple[Path, ...]:
        return self._config.paths

    @property
    def is_running(self) -> bool:
        return self._reloader is not None and self._reloader.is_running
