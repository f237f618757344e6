"""Parallel HTTP downloads that split a file into byte ranges."""

from __future__ import annotations

import math
import os
import posixpath
import tempfile
import threading
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import IO, Callable, Optional, Union
from urllib.parse import urlsplit

import requests

StrPath = Union[str, "os.PathLike[str]"]
ProgressCallback = Callable[[int, int, float], None]

_HEAD_TIMEOUT = 5
_READ_SIZE = 16 * 1024
_PROGRESS_INTERVAL = 1.0


class DownloadError(Exception):
    """Raised when a download cannot be started or one of its parts fails."""


class Downloader:
    """Download one URL over several connections and join the parts into a file.

    The output file is opened for appending, so existing content is kept in front
    of the downloaded bytes.
    """

    def __init__(self, source: str, target: StrPath) -> None:
        self.source = source
        self.target = os.fspath(target)
        self.concurrency = os.cpu_count() or 1
        self.file_name = posixpath.basename(source.rstrip("/")) or "download"
        self.headers: dict[str, str] = {}
        self.total_time: Optional[float] = None
        self._start_time = time.monotonic()
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._chunks: list[IO[bytes]] = []
        self._progress: list[list[int]] = []
        self._out: Optional[IO[bytes]] = None

    def header(self, key: str, value: str) -> "Downloader":
        """Set a request header sent with every request; returns self for chaining."""
        self.headers[key] = value
        return self

    def stop(self) -> None:
        """Ask every running part to abort; start() then raises DownloadError."""
        self._stop.set()

    def close(self) -> None:
        """Close the part files and the output file."""
        for chunk in self._chunks:
            chunk.close()
        if self._out is not None:
            self._out.close()

    def __enter__(self) -> "Downloader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def start(self, progress: Optional[ProgressCallback] = None) -> None:
        """Run the download, blocking until it finishes.

        progress, if given, receives (bytes done, total bytes, floored percent)
        about once a second and once at the end. On failure the output file is
        removed and DownloadError is raised.
        """
        fd = os.open(self.target, os.O_CREAT | os.O_RDWR | os.O_APPEND, 0o755)
        self._out = os.fdopen(fd, "ab")
        try:
            supported, content_length = self._range_details()
            if not supported:
                self.concurrency = 1
            self._process(content_length, progress)
        except BaseException:
            self._out.close()
            try:
                os.remove(self.target)
            except OSError:
                pass
            raise
        finally:
            self.close()
        self.total_time = time.monotonic() - self._start_time

    # --- internals ---------------------------------------------------------

    def _range_details(self) -> tuple[bool, int]:
        try:
            response = requests.head(
                self.source,
                headers=self.headers,
                timeout=_HEAD_TIMEOUT,
                allow_redirects=True,
                stream=True,
            )
        except requests.RequestException as exc:
            raise DownloadError(f"Error calling url : {exc}") from exc
        with response:
            status = response.status_code
            headers = response.headers
        if status == 204:
            raise DownloadError("nocontent")
        if status not in (200, 206):
            raise DownloadError(f"statuscode:{status}")
        try:
            content_length = int(headers.get("Content-Length", ""))
        except ValueError as exc:
            raise DownloadError(f"Error Parsing content length : {exc}") from exc
        return headers.get("Accept-Ranges") == "bytes", content_length

    def _ranges(self, content_length: int) -> list[tuple[int, int]]:
        split = content_length // max(self.concurrency, 1)
        return [
            (first, min(first + split, content_length))
            for first in range(0, content_length, split + 1)
        ]

    def _snapshot(self) -> tuple[int, int]:
        with self._lock:
            done = sum(current for current, _ in self._progress)
            total = sum(expected for _, expected in self._progress)
        return done, total

    def _report(self, progress: Optional[ProgressCallback]) -> None:
        if progress is None:
            return
        done, total = self._snapshot()
        percent = math.floor(done / total * 100) if total else 0.0
        progress(done, total, float(percent))

    def _process(self, content_length: int, progress: Optional[ProgressCallback]) -> None:
        ranges = self._ranges(content_length)
        for first, last in ranges:
            self._chunks.append(
                tempfile.TemporaryFile(prefix=f"{self.file_name}.", suffix=".part")
            )
            expected = min(last, content_length - 1) - first + 1
            self._progress.append([0, expected])

        if ranges:
            with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
                futures = [
                    pool.submit(self._fetch, index, first, last)
                    for index, (first, last) in enumerate(ranges)
                ]
                try:
                    while True:
                        done, pending = wait(
                            futures, timeout=_PROGRESS_INTERVAL, return_when=FIRST_EXCEPTION
                        )
                        if not pending or any(f.exception() for f in done):
                            break
                        self._report(progress)
                    wait(futures)
                except KeyboardInterrupt:
                    self._stop.set()
                    raise
            self._report(progress)
            for future in futures:
                error = future.exception()
                if error is not None:
                    raise error
        else:
            self._report(progress)

        self._combine()

    def _fetch(self, index: int, first: int, last: int) -> None:
        handle = self._chunks[index]
        headers = {"Range": f"bytes={first}-{last}", **self.headers}
        if self._stop.is_set():
            raise DownloadError("stop")
        try:
            with requests.get(self.source, headers=headers, stream=True) as response:
                read_total = 0
                for data in response.iter_content(_READ_SIZE):
                    if self._stop.is_set():
                        raise DownloadError("stop")
                    handle.write(data)
                    read_total += len(data)
                    with self._lock:
                        self._progress[index][0] = read_total
                status = response.status_code
        except requests.RequestException as exc:
            self._stop.set()
            raise DownloadError(f"Error while doing request : {exc}") from exc
        except DownloadError:
            self._stop.set()
            raise
        if status not in (200, 206):
            self._stop.set()
            raise DownloadError("Download error")

    def _combine(self) -> None:
        assert self._out is not None
        for chunk in self._chunks:
            chunk.seek(0)
            while data := chunk.read(_READ_SIZE):
                self._out.write(data)
        self._out.flush()


def download_fast(source: str, target: StrPath) -> Downloader:
    """Create a Downloader for a URL and output path; call start() to run it."""
    return Downloader(source, target)