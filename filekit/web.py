"""HTTP helpers that present themselves as an ordinary browser."""

from __future__ import annotations

import os
import posixpath
import random
import time
from typing import Callable, Mapping, Union
from urllib.parse import urlsplit

import requests
from requests.structures import CaseInsensitiveDict

StrPath = Union[str, "os.PathLike[str]"]

_TIMEOUT = 10
_PROGRESS_INTERVAL = 0.5
_CHUNK_SIZE = 32 * 1024

_BROWSER_TEMPLATES = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/{major}.0.{build}.{patch} Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_{minor}) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/{major}.0.{build}.{patch} Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/{major}.0.{build}.{patch} Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:{firefox}.0) "
    "Gecko/20100101 Firefox/{firefox}.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_{minor}) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/{safari}.{minor} Safari/605.1.15",
)


class StatusError(Exception):
    """Raised when a server answers with an unexpected status code."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"status code is {status_code}")
        self.status_code = status_code


def generate_user_agent() -> str:
    """Return a plausible desktop browser User-Agent string."""
    return random.choice(_BROWSER_TEMPLATES).format(
        major=random.randint(100, 120),
        build=random.randint(4000, 6200),
        patch=random.randint(10, 250),
        minor=random.randint(1, 7),
        firefox=random.randint(100, 120),
        safari=random.randint(14, 17),
    )


def _browser_headers(keep_alive: bool = False) -> dict[str, str]:
    headers = {"Connection": "keep-alive"} if keep_alive else {}
    headers.update(
        {
            "Accept": "*/*",
            "Accept-Language": "en-us",
            "DNT": "1",
            "User-Agent": generate_user_agent(),
        }
    )
    return headers


def _is_request_uri(text: str) -> bool:
    return bool(urlsplit(text).scheme) or text.startswith("/")


def get(link: str, proxy: str | None = None) -> bytes:
    """Fetch a URL with browser-like headers and return the body.

    A proxy such as http://host:port is used when it parses; anything other than
    status 200 raises StatusError.
    """
    proxies = {"http": proxy, "https": proxy} if proxy and _is_request_uri(proxy) else None
    with requests.get(link, headers=_browser_headers(), proxies=proxies, timeout=_TIMEOUT) as response:
        if response.status_code != 200:
            raise StatusError(response.status_code)
        return response.content


def download(link: str) -> bytes:
    """Fetch a URL, returning empty bytes on any failure."""
    try:
        return get(link)
    except (requests.RequestException, StatusError):
        return b""


def post(link: str, body: bytes) -> requests.Response:
    """POST a body with browser-like headers and return the response."""
    return requests.post(link, data=body, headers=_browser_headers(keep_alive=True))


def redirect(link: str) -> str:
    """Return the final URL reached after following redirects of a HEAD request."""
    response = requests.head(link, headers=_browser_headers(keep_alive=True), allow_redirects=True)
    response.close()
    return response.url


def _destination(source: str, target: StrPath) -> str:
    destination = os.fspath(target)
    if os.path.isdir(destination) or destination.endswith(("/", os.sep)):
        name = posixpath.basename(urlsplit(source).path)
        if not name:
            raise ValueError(f"cannot determine a file name from {source!r}")
        destination = os.path.join(destination, name)
    parent = os.path.dirname(destination)
    if parent:
        os.makedirs(parent, exist_ok=True)
    return destination


def download_file(
    source: str,
    target: StrPath,
    headers: Mapping[str, str] | None = None,
    progress: Callable[[int, int, int], None] | None = None,
) -> str:
    """Stream a URL into a file and return the path written.

    When target is a directory the file is named after the last URL path element.
    progress, if given, receives (bytes done, total bytes, percent) about every
    half second and once at the end.
    """
    request_headers = CaseInsensitiveDict(
        {"Connection": "keep-alive", "Accept": "*/*", "Accept-Language": "en-us", "DNT": "1"}
    )
    request_headers.update(headers or {})
    if not request_headers.get("User-Agent"):
        request_headers["User-Agent"] = generate_user_agent()

    destination = _destination(source, target)
    done = total = 0

    def report() -> None:
        if progress is not None:
            percent = int(100 * done / total) if total > 0 else 0
            progress(done, total, percent)

    with requests.get(source, headers=request_headers, stream=True, timeout=_TIMEOUT) as response:
        if not 200 <= response.status_code < 300:
            raise StatusError(response.status_code)
        try:
            total = int(response.headers.get("Content-Length") or 0)
        except ValueError:
            total = 0
        last = time.monotonic()
        with open(destination, "wb") as handle:
            for chunk in response.iter_content(_CHUNK_SIZE):
                handle.write(chunk)
                done += len(chunk)
                now = time.monotonic()
                if now - last >= _PROGRESS_INTERVAL:
                    report()
                    last = now
    report()
    return destination