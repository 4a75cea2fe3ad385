"""Line format of table source files.

Each physical line is one of:

* blank (only whitespace) -- ignored
* a comment, first non-whitespace character ``#`` -- ignored
* ``key: value`` -- both sides trimmed of surrounding whitespace
* ``key`` -- no delimiter, the value is the empty string

Keys and values are frequently addresses whose local part may be a quoted
string (``"a @ a"@example.org``), so the ``:`` delimiter is only recognised
outside double-quoted runs. Inside a run a backslash escapes the next
character. Quotes and escapes are kept verbatim in the parsed key and value.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from filetable._constants import COMMENT, DELIMITER, ESCAPE, QUOTE
from filetable.exceptions import FileTableParseError


@dataclass(frozen=True, slots=True)
class Entry:
    """A single key/value pair read from a source line."""

    key: str
    value: str = ""


def _find_delimiter(line: str) -> int:
    """Return the index of the first unquoted delimiter, or ``-1``.

    The whole line is scanned so that an unterminated quoted run is
    reported even when it sits after the delimiter.
    """
    found = -1
    in_quotes = False
    escaped = False
    for idx, char in enumerate(line):
        if in_quotes:
            if escaped:
                escaped = False
            elif char == ESCAPE:
                escaped = True
            elif char == QUOTE:
                in_quotes = False
            continue
        if char == QUOTE:
            in_quotes = True
        elif char == DELIMITER and found < 0:
            found = idx
    if in_quotes:
        raise FileTableParseError("unterminated quoted string", line=line)
    return found


def parse_line(line: str) -> Entry | None:
    """Parse one line; ``None`` means the line carries no entry.

    Raises :class:`FileTableParseError` for an empty key or an
    unterminated quoted string.
    """
    text = line.strip()
    if not text or text.startswith(COMMENT):
        return None

    idx = _find_delimiter(text)
    if idx < 0:
        return Entry(key=text)

    key = text[:idx].strip()
    if not key:
        raise FileTableParseError("empty key before delimiter", line=text)
    return Entry(key=key, value=text[idx + 1 :].strip())


def iter_entries(lines: Iterable[str]) -> Iterator[tuple[int, Entry]]:
    """Yield ``(lineno, entry)`` for every entry-bearing line.

    Line numbers are 1-based. Parse failures are re-raised with ``lineno``
    set; the caller adds the file path.
    """
    for lineno, line in enumerate(lines, start=1):
        try:
            entry = parse_line(line)
        except FileTableParseError as exc:
            raise FileTableParseError(exc.reason, line=exc.line, lineno=lineno) from exc
        if entry is not None:
            yield lineno, entry


def format_line(entry: Entry) -> str:
    """Render *entry* in the source line format."""
    if not entry.value:
        return entry.key
    return f"{entry.key}{DELIMITER} {entry.value}"
