"""Watching files and directories for changes."""

from __future__ import annotations

import errno
import os
import threading
from typing import Callable, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

StrPath = Union[str, "os.PathLike[str]"]

_CHANGE_EVENTS = frozenset({"created", "deleted", "modified", "moved"})


def _normalise(path: str | bytes | os.PathLike) -> str:
    return os.path.realpath(os.fsdecode(path))


class _FileHandler(FileSystemEventHandler):
    def __init__(self, path: str, on_update: Callable[[], None]) -> None:
        super().__init__()
        self._path = path
        self._on_update = on_update

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and _normalise(event.src_path) == self._path:
            self._on_update()


class _DirectoryHandler(FileSystemEventHandler):
    def __init__(self, root: str, on_update: Callable[[str], None]) -> None:
        super().__init__()
        self._root = root
        self._on_update = on_update

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _CHANGE_EVENTS:
            return
        path = _normalise(event.src_path)
        if path != self._root:
            self._on_update(path)


def _run(handler: FileSystemEventHandler, directory: str, stop_event: threading.Event | None) -> None:
    observer = Observer()
    observer.schedule(handler, directory, recursive=False)
    observer.start()
    try:
        if stop_event is None:
            while observer.is_alive():
                observer.join(1)
        else:
            stop_event.wait()
    finally:
        observer.stop()
        observer.join()


def notify(
    filename: StrPath,
    on_update: Callable[[], None],
    stop_event: threading.Event | None = None,
) -> None:
    """Call on_update whenever the file is written; block until stop_event is set."""
    path = _normalise(filename)
    if not os.path.exists(path):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(filename))
    _run(_FileHandler(path, on_update), os.path.dirname(path), stop_event)


def notify_dir(
    directory: StrPath,
    on_update: Callable[[str], None],
    stop_event: threading.Event | None = None,
) -> None:
    """Call on_update with the path of each entry changed in a directory.

    Blocks until stop_event is set.
    """
    root = _normalise(directory)
    if not os.path.exists(root):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(directory))
    if not os.path.isdir(root):
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), os.fspath(directory))
    _run(_DirectoryHandler(root, on_update), root, stop_event)