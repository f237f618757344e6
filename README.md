# filekit

Small helpers for everyday file work: reading and writing files, JSON and
MessagePack, compression, password-based encryption, line and CSV scanning,
watching for changes and downloading over HTTP.

## Installation

```
pip install filekit
```

For running the tests:

```
pip install "filekit[test]"
pytest
```

## Modules

### `filekit.fileio`

- Appending: `append`, `append_line`, `appends` (each chunk followed by a
  newline) and `log`, which appends its arguments' string forms as one CSV record.
- Reading: `read_bytes`, `read_bytes_or_empty`, `load_json`, `load_msgpack`.
- Writing: `save` (creates missing parent directories), `save_parts` (path
  joined from parts), `save_json` (compact JSON), `save_msgpack`, `rewrite`.
- `open_writer` returns a `LineWriter` on a fresh file, with `write`,
  `write_line` and `close`; it also works as a context manager.
- Files and paths: `copy` (regular files only), `move`, `exists`, `info`,
  `size` (0 when the file cannot be examined), `size_strict` (raises instead),
  `ext`, `filename`, `split_path`, `create_directory`.
- Removal: `delete`, `delete_mask` (glob pattern), `delete_directory`.
- Listing: `directory` (entries sorted by name), `file_list` (files directly in
  a directory, optionally filtered by suffixes), `files` (the whole tree,
  optionally filtered by one suffix).
- `line_count` counts newline bytes.

### `filekit.codec`

- `base64_encode` / `base64_decode`: standard base64 without padding.
- `compress` / `uncompress`: MessagePack then gzip, and back.
- `gzip_bytes` / `ungzip`, `lz4_compress` / `lz4_decompress` (size-prefixed LZ4 blocks).
- `zip_files` writes a deflated archive; `unzip` yields `(name, content)` pairs.
- `encrypt` / `decrypt`: AES-256-CFB with a key derived from a password and a
  random IV at the front. `save_encrypted` / `load_encrypted` store a value as
  encrypted JSON.

### `filekit.lines`

- `lines(filename, limit)` yields lines as bytes; `play` yields text lines of up
  to 512 KiB; `play_stop` feeds lines to a handler until it returns true.
- `csv_rows(filename, delimiter)` yields stripped CSV records.
- `sql_fields`, `sql_lines` and `sql_records` read the column names and row
  tuples of simple SQL `INSERT` dumps.
- `count` counts lines.

### `filekit.watch`

- `notify(filename, on_update, stop_event)` calls `on_update()` whenever the file
  is modified; `notify_dir(directory, on_update, stop_event)` calls
  `on_update(path)` for each entry created, deleted, modified or moved. Both block
  until the given `threading.Event` is set, or indefinitely when none is given.

### `filekit.web`

- `get(link, proxy)` fetches a URL with browser-like headers and raises
  `StatusError` for any status other than 200; `download` returns empty bytes on
  failure instead.
- `post`, `redirect` (final URL after redirects of a HEAD request) and
  `download_file`, which streams into a file and reports progress.
- `generate_user_agent` returns a desktop browser User-Agent string.

### `filekit.downloader`

- `Downloader` (or `download_fast(source, target)`) fetches a file over several
  parallel range requests when the server accepts them, then joins the parts.
  `header` adds request headers, `start(progress)` runs the download, `stop`
  aborts it and `close` releases the files. Failures raise `DownloadError`.

## Examples

```python
from filekit import codec, fileio, lines

fileio.save("out/data.json", b'{"a": 1}')
print(fileio.load_json("out/data.json"))

fileio.append_line("out/log.txt", b"first")
print(fileio.line_count("out/log.txt"))

packed = codec.compress({"name": "demo", "values": [1, 2, 3]})
print(codec.uncompress(packed))

password = "password"
sealed = codec.encrypt(b"hello", password)
assert codec.decrypt(sealed, password) == b"hello"

for line in lines.play("out/log.txt"):
    print(line)
```

Parallel download with progress reporting:

```python
from filekit.downloader import download_fast

def report(now, total, percent):
    print(f"{now}/{total} bytes ({percent:.0f}%)")

download_fast("https://example.com/big.bin", "big.bin").start(report)
```

## What it does not do

filekit is a library only: it installs no command-line program, and the
watchers and downloaders run only when called from your own code.