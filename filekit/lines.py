"""Line-oriented readers for plain text, CSV and SQL dump files."""

from __future__ import annotations

import csv
import os
from itertools import islice
from typing import Callable, Iterator, Union

StrPath = Union[str, "os.PathLike[str]"]

_DEFAULT_MAX_LINE = 64 * 1024
_PLAY_MAX_LINE = 512 * 1024
_SQL_HEADER_LINES = 20


def _iter_lines(handle, max_line: int) -> Iterator[bytes]:
    """Yield lines without their terminators; stop at a line of max_line bytes or more."""
    try:
        for raw in handle:
            line = raw[:-1] if raw.endswith(b"\n") else raw
            if len(line) >= max_line:
                return
            yield line[:-1] if line.endswith(b"\r") else line
    except OSError:
        return


def _scan(filename: StrPath, max_line: int = _DEFAULT_MAX_LINE) -> Iterator[bytes]:
    try:
        handle = open(filename, "rb")
    except OSError:
        return
    with handle:
        yield from _iter_lines(handle, max_line)


def _scan_text(filename: StrPath, max_line: int = _DEFAULT_MAX_LINE) -> Iterator[str]:
    for line in _scan(filename, max_line):
        yield line.decode("utf-8", errors="replace")


def lines(filename: StrPath, limit: int = 0) -> Iterator[bytes]:
    """Yield the lines of a file as bytes, at most limit of them when limit is positive.

    A file that cannot be opened yields nothing; reading stops at an overlong line.
    """
    scanned = _scan(filename)
    yield from (islice(scanned, limit) if limit > 0 else scanned)


def play(filename: StrPath) -> Iterator[str]:
    """Yield the lines of a file as text, allowing lines of up to 512 KiB."""
    yield from _scan_text(filename, _PLAY_MAX_LINE)


def play_stop(filename: StrPath, handler: Callable[[str], bool]) -> None:
    """Pass each line to handler until it returns true; an unopenable file raises."""
    with open(filename, "rb") as handle:
        for line in _iter_lines(handle, _DEFAULT_MAX_LINE):
            if handler(line.decode("utf-8", errors="replace")):
                return


def csv_rows(filename: StrPath, delimiter: str = ",") -> Iterator[list[str]]:
    """Yield CSV records with each field stripped of surrounding whitespace.

    Reading ends silently at the first malformed record or at a record whose field
    count differs from the first one's.
    """
    if isinstance(delimiter, (bytes, bytearray)):
        delimiter = delimiter.decode("latin-1")
    try:
        handle = open(filename, newline="", encoding="utf-8", errors="replace")
    except OSError:
        return
    with handle:
        width: int | None = None
        try:
            for row in csv.reader(handle, delimiter=delimiter, strict=True):
                if not row:
                    continue
                if width is None:
                    width = len(row)
                elif len(row) != width:
                    return
                yield [field.strip() for field in row]
        except (csv.Error, OSError):
            return


def sql_fields(filename: StrPath) -> list[str]:
    """Return the column names of the first INSERT statement within the first 20 lines."""
    for line in islice(_scan_text(filename), _SQL_HEADER_LINES):
        if "INSERT INTO" not in line:
            continue
        start = line.find("(")
        if start == -1:
            return []
        end = line.find(") VALUES")
        if end == -1:
            return []
        return line[start + 1 : end].split(", ")
    return []


def sql_lines(filename: StrPath) -> Iterator[list[str]]:
    """Yield the values of each row tuple line of an SQL dump, quotes removed."""
    for line in _scan_text(filename):
        if not line.startswith("("):
            continue
        text = line[1:].removesuffix("),").replace("NULL", "''")
        yield [part.replace("'", "") for part in text.split("', ")]


def sql_records(filename: StrPath) -> Iterator[dict[str, str]]:
    """Yield each row of an SQL dump as a mapping of column name to value.

    A row whose value count does not match the column count gives an empty mapping.
    """
    fields = sql_fields(filename)
    for values in sql_lines(filename):
        yield dict(zip(fields, values)) if len(values) == len(fields) else {}


def count(filename: StrPath) -> int:
    """Count the lines of a file; an unopenable file counts as 0."""
    return sum(1 for _ in _scan(filename))