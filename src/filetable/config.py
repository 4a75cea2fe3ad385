"""Table configuration for filetable."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from filetable._constants import DEFAULT_RELOAD_INTERVAL, DEFAULT_TABLE_NAME, ENV_PREFIX
from filetable.exceptions import FileTableConfigError


def _split_paths(value: str) -> tuple[str, ...]:
    return tuple(part for part in (p.strip() for p in value.split(os.pathsep)) if part)


@dataclasses.dataclass(frozen=True)
class FileTableConfig:
    """Table configuration.

    Parameters
    ----------
    paths : tuple of Path
        Source files, in merge order. Accepts any iterable of ``str`` or
        path-like objects; a single path is accepted too. Values from a
        later file override values from an earlier one.
    reload_interval : float
        Seconds between two checks of the source files. Defaults to 15.
    name : str
        Instance name used in log records and thread names.
    """

    paths: tuple[Path, ...]
    reload_interval: float = DEFAULT_RELOAD_INTERVAL
    name: str = DEFAULT_TABLE_NAME

    def __post_init__(self) -> None:
        raw: Any = self.paths
        if isinstance(raw, (str, os.PathLike)):
            raw = (raw,)
        if not isinstance(raw, Iterable):
            raise FileTableConfigError(f"paths must be an iterable of paths, got {type(raw).__name__}")

        paths: list[Path] = []
        for item in raw:
            if not isinstance(item, (str, os.PathLike)) or not os.fspath(item):
                raise FileTableConfigError(f"Invalid source path: {item!r}")
            paths.append(Path(item))
        if not paths:
            raise FileTableConfigError("At least one source file is required")
        object.__setattr__(self, "paths", tuple(paths))

        try:
            interval = float(self.reload_interval)
        except (TypeError, ValueError) as exc:
            raise FileTableConfigError(f"Invalid reload_interval: {self.reload_interval!r}") from exc
        if interval <= 0:
            raise FileTableConfigError(f"reload_interval must be positive, got {interval}")
        object.__setattr__(self, "reload_interval", interval)

        if not isinstance(self.name, str) or not self.name.strip():
            raise FileTableConfigError("name must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> FileTableConfig:
        """Create configuration from environment variables.

        Reads ``FILETABLE_PATHS`` (``os.pathsep``-separated),
        ``FILETABLE_RELOAD_INTERVAL`` and ``FILETABLE_NAME``. Explicit
        keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        paths_env = env.get(f"{ENV_PREFIX}PATHS")
        if paths_env is not None:
            config_kwargs["paths"] = _split_paths(paths_env)

        interval_env = env.get(f"{ENV_PREFIX}RELOAD_INTERVAL")
        if interval_env is not None and "reload_interval" not in overrides:
            try:
                config_kwargs["reload_interval"] = float(interval_env)
            except ValueError as exc:
                raise FileTableConfigError(
                    f"{ENV_PREFIX}RELOAD_INTERVAL is not a number: {interval_env!r}"
                ) from exc

        name_env = env.get(f"{ENV_PREFIX}NAME")
        if name_env is not None:
            config_kwargs["name"] = name_env

        config_kwargs.update(overrides)
        if "paths" not in config_kwargs:
            raise FileTableConfigError(f"{ENV_PREFIX}PATHS is not set")

        return cls(**config_kwargs)
