"""Encoding, compression, archiving and symmetric encryption helpers."""

from __future__ import annotations

import base64
import binascii
import gzip
import hashlib
import json
import os
import zlib
from pathlib import Path
from typing import Any, Iterator
from zipfile import ZIP_DEFLATED, BadZipFile, ZipFile, ZipInfo

import lz4.block
import msgpack
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_BLOCK_SIZE = 16


# --- base64 ----------------------------------------------------------------


def base64_encode(data: bytes) -> str:
    """Encode bytes as standard base64 without padding."""
    return base64.b64encode(data).rstrip(b"=").decode("ascii")


def base64_decode(text: str) -> bytes:
    """Decode unpadded standard base64; malformed input gives empty bytes."""
    if "=" in text or len(text) % 4 == 1:
        return b""
    try:
        return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
    except (binascii.Error, ValueError):
        return b""


# --- compression -----------------------------------------------------------


def compress(value: Any) -> bytes:
    """Serialise a value with MessagePack and gzip the result."""
    return gzip.compress(msgpack.packb(value, use_bin_type=True), mtime=0)


def uncompress(data: bytes) -> Any:
    """Reverse compress(): gunzip then decode MessagePack."""
    return msgpack.unpackb(gzip.decompress(data), raw=False)


def gzip_bytes(body: bytes) -> bytes:
    """Gzip bytes."""
    return gzip.compress(body, mtime=0)


def ungzip(data: bytes) -> bytes:
    """Gunzip bytes."""
    return gzip.decompress(data)


def lz4_compress(data: bytes) -> bytes:
    """Compress into an LZ4 block prefixed with its little-endian 32-bit original size."""
    return lz4.block.compress(data, store_size=True)


def lz4_decompress(data: bytes) -> bytes:
    """Reverse lz4_compress(); corrupt input gives empty bytes."""
    try:
        return lz4.block.decompress(data)
    except (lz4.block.LZ4BlockError, ValueError):
        return b""


# --- zip archives ----------------------------------------------------------


def zip_files(target: str | os.PathLike[str], *args: str | os.PathLike[str]) -> None:
    """Create a deflated zip archive of the given files, skipping those that cannot be read."""
    with ZipFile(target, "w", compression=ZIP_DEFLATED) as archive:
        for source in args:
            name = os.fspath(source)
            try:
                data = Path(name).read_bytes()
            except OSError:
                continue
            entry = ZipInfo(name)
            entry.compress_type = ZIP_DEFLATED
            entry.external_attr = 0o644 << 16
            archive.writestr(entry, data)


def unzip(zipfile: str | os.PathLike[str]) -> Iterator[tuple[str, bytes]]:
    """Yield (name, content) for each archive entry, skipping entries that cannot be read."""
    with ZipFile(zipfile) as archive:
        for entry in archive.infolist():
            try:
                body = archive.read(entry)
            except (BadZipFile, NotImplementedError, RuntimeError, OSError, zlib.error):
                continue
            yield entry.filename, body


# --- encryption ------------------------------------------------------------


def _derive_key(key: str) -> bytes:
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest)[:32]


def encrypt(data: bytes, key: str) -> bytes:
    """Base64-encode data and encrypt it with AES-256-CFB; the random IV leads the output."""
    encoded = base64.b64encode(bytes(data))
    iv = os.urandom(_BLOCK_SIZE)
    encryptor = Cipher(algorithms.AES(_derive_key(key)), modes.CFB(iv)).encryptor()
    return iv + encryptor.update(encoded) + encryptor.finalize()


def decrypt(data: bytes, key: str) -> bytes:
    """Reverse encrypt(); input that is too short or does not decode gives empty bytes."""
    if len(data) < _BLOCK_SIZE:
        return b""
    iv, body = data[:_BLOCK_SIZE], data[_BLOCK_SIZE:]
    decryptor = Cipher(algorithms.AES(_derive_key(key)), modes.CFB(iv)).decryptor()
    plain = decryptor.update(body) + decryptor.finalize()
    try:
        return base64.b64decode(plain, validate=True)
    except (binascii.Error, ValueError):
        return b""


def save_encrypted(filename: str | os.PathLike[str], password: str, value: Any) -> None:
    """Write a value as JSON encrypted with the password."""
    body = json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    Path(filename).write_bytes(encrypt(body, password))


def load_encrypted(filename: str | os.PathLike[str], password: str) -> Any:
    """Read a value written by save_encrypted(); a wrong password raises ValueError."""
    return json.loads(decrypt(Path(filename).read_bytes(), password))