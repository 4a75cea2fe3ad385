"""filetable - File-backed key/value lookup table with hot reload."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("filetable")
except PackageNotFoundError:
    __version__ = "0+local"
from filetable._reloader import LoopState
from filetable.config import FileTableConfig
from filetable.exceptions import (
    FileTableConfigError,
    FileTableError,
    FileTableLoadError,
    FileTableParseError,
    FileTableReadError,
)
from filetable.loader import load_snapshot
from filetable.models import FileStamp, Snapshot
from filetable.parser import Entry, format_line, parse_line
from filetable.table import FileTable

__all__ = [
    "__version__",
    "Entry",
    "FileStamp",
    "FileTable",
    "FileTableConfig",
    "FileTableConfigError",
    "FileTableError",
    "FileTableLoadError",
    "FileTableParseError",
    "FileTableReadError",
    "LoopState",
    "Snapshot",
    "format_line",
    "load_snapshot",
    "parse_line",
]
