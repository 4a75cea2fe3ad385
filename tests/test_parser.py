"""Tests for the table line format."""

from __future__ import annotations

import pytest

from filetable.exceptions import FileTableParseError
from filetable.parser import Entry, format_line, iter_entries, parse_line


def _parse_all(text: str) -> dict[str, str]:
    return {entry.key: entry.value for _lineno, entry in iter_entries(text.splitlines())}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a: b", {"a": "b"}),
        ("a@example.org: b@example.com", {"a@example.org": "b@example.com"}),
        ('"a @ a"@example.org: b@example.com', {'"a @ a"@example.org': "b@example.com"}),
        ('a@example.org: "b @ b"@example.com', {"a@example.org": '"b @ b"@example.com'}),
        ('"a @ a": "b @ b"', {'"a @ a"': '"b @ b"'}),
        ("a: b, c", {"a": "b, c"}),
        ("aaa", {"aaa": ""}),
        (
            "     testing@example.com   :  arbitrary-whitespace@example.org   ",
            {"testing@example.com": "arbitrary-whitespace@example.org"},
        ),
        ("# skip comments\na: b", {"a": "b"}),
        ("# and empty lines\n\na: b", {"a": "b"}),
        ("# with whitespace too\n    \na: b", {"a": "b"}),
        ("\t# indented comment\n\t\na: b", {"a": "b"}),
        ("a: b\na: c", {"a": "c"}),
    ],
)
def test_parse_valid_text(text: str, expected: dict[str, str]) -> None:
    assert _parse_all(text) == expected


@pytest.mark.parametrize("line", [": b", ":", "   :   ", '"a: b', 'a: "b'])
def test_parse_invalid_line(line: str) -> None:
    with pytest.raises(FileTableParseError):
        parse_line(line)


def test_colon_inside_quotes_is_not_a_delimiter() -> None:
    assert parse_line('"user:1"@example.org: target') == Entry('"user:1"@example.org', "target")


def test_only_first_unquoted_colon_splits() -> None:
    assert parse_line("a: b: c") == Entry("a", "b: c")


def test_escaped_quote_stays_inside_run() -> None:
    entry = parse_line(r'"say \"hi: there\""@example.org: x')
    assert entry == Entry(r'"say \"hi: there\""@example.org', "x")


def test_empty_value_after_delimiter() -> None:
    assert parse_line("a:") == Entry("a", "")


def test_comment_and_blank_lines_skip() -> None:
    assert parse_line("# comment: with colon") is None
    assert parse_line("   ") is None
    assert parse_line("") is None


def test_hash_after_text_is_not_a_comment() -> None:
    assert parse_line("a: b # not a comment") == Entry("a", "b # not a comment")


def test_iter_entries_reports_line_number() -> None:
    with pytest.raises(FileTableParseError) as excinfo:
        list(iter_entries(["a: b", "# fine", ": broken"]))

    assert excinfo.value.lineno == 3
    assert excinfo.value.line == ": broken"
    assert "empty key" in excinfo.value.reason


def test_iter_entries_yields_line_numbers() -> None:
    result = list(iter_entries(["# header", "", "a: b", "c"]))
    assert result == [(3, Entry("a", "b")), (4, Entry("c", ""))]


@pytest.mark.parametrize(
    "entry",
    [
        Entry("a", "b"),
        Entry("aaa", ""),
        Entry('"a @ a"@example.org', '"b @ b"@example.com'),
        Entry(r'"x \" : y"', "z"),
    ],
)
def test_format_line_round_trips(entry: Entry) -> None:
    assert parse_line(format_line(entry)) == entry
