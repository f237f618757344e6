"""Everyday file operations: reading, writing, appending, listing and removal."""

from __future__ import annotations

import csv
import glob
import io
import json
import os
import posixpath
import shutil
import stat
from contextlib import suppress
from pathlib import Path
from typing import Any, BinaryIO, NamedTuple, Union

import msgpack

StrPath = Union[str, "os.PathLike[str]"]

_CHUNK_SIZE = 32 * 1024


class PathParts(NamedTuple):
    """A slash-separated path split into its directory, base name and joined form."""

    directory: str
    name: str
    full: str


class LineWriter:
    """A binary file opened for writing, with a helper for newline-terminated records."""

    def __init__(self, handle: BinaryIO) -> None:
        self._handle = handle

    @property
    def name(self) -> str:
        return self._handle.name

    def write(self, data: bytes) -> int:
        return self._handle.write(data)

    def write_line(self, data: bytes) -> None:
        self._handle.write(bytes(data) + b"\n")

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> "LineWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


# --- appending -------------------------------------------------------------


def append(filename: StrPath, body: bytes) -> None:
    """Append raw bytes to a file, creating it when missing."""
    with open(filename, "ab") as handle:
        handle.write(body)


def append_line(filename: StrPath, line: bytes) -> None:
    """Append bytes followed by a newline."""
    with open(filename, "ab") as handle:
        handle.write(bytes(line) + b"\n")


def log(filename: StrPath, *args: Any) -> None:
    """Append the string forms of the arguments as one CSV record."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(str(value) for value in args)
    append(filename, buffer.getvalue().encode("utf-8"))


def appends(filename: StrPath, *args: bytes) -> None:
    """Append each chunk followed by a newline."""
    with open(filename, "ab") as handle:
        for body in args:
            handle.write(bytes(body) + b"\n")


# --- reading ---------------------------------------------------------------


def read_bytes(filename: StrPath) -> bytes:
    """Return the whole content of a file."""
    return Path(filename).read_bytes()


def read_bytes_or_empty(filename: StrPath) -> bytes:
    """Return the content of a file, or empty bytes when it cannot be read."""
    try:
        return Path(filename).read_bytes()
    except OSError:
        return b""


def move(source: StrPath, target: StrPath) -> None:
    """Rename a file, replacing the target if it exists."""
    os.replace(source, target)


def copy(source: StrPath, target: StrPath) -> None:
    """Copy a regular file's content; anything that is not a regular file is left alone."""
    if not stat.S_ISREG(os.stat(source).st_mode):
        return
    shutil.copyfile(source, target)


def load_json(filename: StrPath) -> Any:
    """Parse a JSON file."""
    return json.loads(Path(filename).read_bytes())


def load_msgpack(filename: StrPath) -> Any:
    """Decode a MessagePack file."""
    return msgpack.unpackb(Path(filename).read_bytes(), raw=False)


def rewrite(filename: StrPath, body: bytes) -> None:
    """Replace the content of a file."""
    Path(filename).write_bytes(body)


# --- metadata --------------------------------------------------------------


def exists(name: StrPath) -> bool:
    """Report whether a path exists; only a definite 'not found' counts as absent."""
    try:
        os.stat(name)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def info(name: StrPath) -> os.stat_result:
    """Return the stat record of a path."""
    return os.stat(name)


def size(name: StrPath) -> int:
    """Return the size of a file in bytes, or 0 when it cannot be examined."""
    try:
        return os.stat(name).st_size
    except OSError:
        return 0


def size_strict(name: StrPath) -> int:
    """Return the size of a file in bytes, raising when it cannot be examined."""
    return os.stat(name).st_size


def _separators() -> str:
    return os.sep + (os.altsep or "")


def ext(name: StrPath) -> str:
    """Return the extension of the last path element, without the leading dot."""
    text = os.fspath(name)
    tail = text
    for index in range(len(text) - 1, -1, -1):
        if text[index] in _separators():
            tail = text[index + 1 :]
            break
    dot = tail.rfind(".")
    return tail[dot + 1 :] if dot >= 0 else ""


def _base(path: str, separators: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip(separators)
    if not stripped:
        return separators[0]
    cut = max(stripped.rfind(sep) for sep in separators)
    return stripped[cut + 1 :]


def filename(path: StrPath) -> str:
    """Return the last element of a path, ignoring trailing separators."""
    return _base(os.fspath(path), _separators())


def split_path(filename: StrPath) -> PathParts:
    """Split a slash-separated path into directory, base name and their cleaned join."""
    text = os.fspath(filename)
    name = _base(text, "/")
    directory = posixpath.normpath(posixpath.dirname(text) or ".")
    full = posixpath.normpath(posixpath.join(directory, name))
    return PathParts(directory, name, full)


# --- writing ---------------------------------------------------------------


def create_directory(volume: StrPath, *args: StrPath) -> None:
    """Create a directory and the given subdirectories inside it."""
    os.makedirs(volume, exist_ok=True)
    for subdirectory in args:
        os.makedirs(os.path.join(volume, subdirectory), exist_ok=True)


def _prepare(filename: StrPath) -> str:
    parts = split_path(filename)
    os.makedirs(parts.directory, exist_ok=True)
    return parts.full


def save(filename: StrPath, body: bytes) -> None:
    """Write bytes to a file, creating missing parent directories."""
    Path(_prepare(filename)).write_bytes(body)


def save_parts(body: bytes, *args: StrPath) -> None:
    """Write bytes to the file whose path is formed by joining the parts."""
    save(os.path.join(*args) if args else "", body)


def save_json(filename: StrPath, body: Any) -> None:
    """Write a value as compact JSON, creating missing parent directories."""
    data = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    Path(_prepare(filename)).write_bytes(data)


def save_msgpack(filename: StrPath, body: Any) -> None:
    """Write a value as MessagePack, creating missing parent directories."""
    data = msgpack.packb(body, use_bin_type=True)
    Path(_prepare(filename)).write_bytes(data)


def open_writer(filename: StrPath) -> LineWriter:
    """Open a fresh file for writing, discarding any previous content."""
    with suppress(OSError):
        os.remove(filename)
    return LineWriter(open(filename, "wb"))


# --- removal ---------------------------------------------------------------


def delete(filename: StrPath) -> None:
    """Remove a file."""
    os.remove(filename)


def delete_mask(mask: str) -> None:
    """Remove every path matching a glob pattern, skipping those that cannot be removed."""
    for match in glob.glob(mask):
        with suppress(OSError):
            os.remove(match)


def delete_directory(directory: StrPath) -> None:
    """Remove a path and everything below it; a missing path is not an error."""
    if os.path.isdir(directory) and not os.path.islink(directory):
        shutil.rmtree(directory)
        return
    with suppress(FileNotFoundError):
        os.remove(directory)


# --- listing ---------------------------------------------------------------


def _entries(path: str) -> list[os.DirEntry]:
    try:
        with os.scandir(path or ".") as iterator:
            return sorted(iterator, key=lambda entry: entry.name)
    except OSError:
        return []


def _join(directory: str, name: str) -> str:
    return os.path.normpath(os.path.join(directory, name)) if directory else name


def directory(path: StrPath = "") -> list[os.DirEntry]:
    """Return the entries of a directory sorted by name; unreadable directories give none."""
    return _entries(os.fspath(path))


def file_list(directory: StrPath, *args: str) -> list[str]:
    """List the files directly inside a directory, optionally only those with given suffixes."""
    base = os.fspath(directory)
    return [
        _join(base, entry.name)
        for entry in _entries(base)
        if not entry.is_dir(follow_symlinks=False)
        and (not args or entry.name.endswith(tuple(args)))
    ]


def files(directory: StrPath, *args: str) -> list[str]:
    """List files in a directory tree, optionally only those ending with the first suffix."""
    suffix = args[0] if args else None
    found: list[str] = []

    def walk(path: str) -> None:
        for entry in _entries(path):
            if entry.is_dir(follow_symlinks=False):
                walk(_join(path, entry.name))
            elif suffix is None or entry.name.endswith(suffix):
                found.append(_join(path, entry.name))

    walk(os.fspath(directory))
    return found


def line_count(filename: StrPath) -> int:
    """Count newline bytes in a file."""
    count = 0
    with open(filename, "rb") as handle:
        while chunk := handle.read(_CHUNK_SIZE):
            count += chunk.count(b"\n")
    return count