"""Internal constants shared across the library."""

#: Default seconds between two reload checks.
DEFAULT_RELOAD_INTERVAL: float = 15.0

#: Instance name reported in log records when none is configured.
DEFAULT_TABLE_NAME = "table.file"

#: Prefix of the environment variables read by ``FileTableConfig.from_env``.
ENV_PREFIX = "FILETABLE_"

# ------------------------------------------------------------------
# Line format
# ------------------------------------------------------------------

COMMENT = "#"
DELIMITER = ":"
QUOTE = '"'
ESCAPE = "\\"

#: Source files are UTF-8; a leading byte-order mark is dropped.
FILE_ENCODING = "utf-8-sig"
