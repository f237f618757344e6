import os

import pytest

from filekit import fileio


def test_append_creates_and_extends(tmp_path):
    target = tmp_path / "a.bin"
    fileio.append(target, b"one")
    fileio.append(target, b"two")
    assert target.read_bytes() == b"onetwo"


def test_append_line_adds_newline(tmp_path):
    target = tmp_path / "lines.txt"
    fileio.append_line(target, b"first")
    fileio.append_line(target, b"second")
    assert target.read_bytes() == b"first\nsecond\n"


def test_appends_writes_each_chunk_on_its_own_line(tmp_path):
    target = tmp_path / "many.txt"
    fileio.appends(target, b"a", b"b")
    assert target.read_bytes() == b"a\nb\n"


def test_log_writes_csv_record(tmp_path):
    target = tmp_path / "log.csv"
    fileio.log(target, "a", 1, "b,c")
    assert target.read_bytes() == b'a,1,"b,c"\n'


def test_read_bytes_and_missing(tmp_path):
    target = tmp_path / "data"
    target.write_bytes(b"content")
    assert fileio.read_bytes(target) == b"content"
    with pytest.raises(FileNotFoundError):
        fileio.read_bytes(tmp_path / "missing")


def test_read_bytes_or_empty_on_missing(tmp_path):
    assert fileio.read_bytes_or_empty(tmp_path / "missing") == b""


def test_move(tmp_path):
    source = tmp_path / "src"
    target = tmp_path / "dst"
    source.write_bytes(b"payload")
    fileio.move(source, target)
    assert not source.exists()
    assert target.read_bytes() == b"payload"


def test_copy_regular_file(tmp_path):
    source = tmp_path / "src"
    target = tmp_path / "dst"
    source.write_bytes(b"payload")
    fileio.copy(source, target)
    assert target.read_bytes() == source.read_bytes()


def test_copy_directory_is_ignored(tmp_path):
    source = tmp_path / "folder"
    source.mkdir()
    target = tmp_path / "dst"
    fileio.copy(source, target)
    assert not target.exists()


def test_copy_missing_source_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        fileio.copy(tmp_path / "missing", tmp_path / "dst")


def test_json_round_trip_creates_parents(tmp_path):
    target = tmp_path / "nested" / "deep" / "value.json"
    value = {"name": "x", "items": [1, 2, 3], "flag": True}
    fileio.save_json(target, value)
    assert fileio.load_json(target) == value


def test_msgpack_round_trip(tmp_path):
    target = tmp_path / "sub" / "value.mp"
    value = {"name": "x", "items": [1, 2, 3], "blob": b"\x00\x01"}
    fileio.save_msgpack(target, value)
    assert fileio.load_msgpack(target) == value


def test_rewrite_replaces_content(tmp_path):
    target = tmp_path / "file"
    target.write_bytes(b"old content that is long")
    fileio.rewrite(target, b"new")
    assert target.read_bytes() == b"new"


def test_exists(tmp_path):
    present = tmp_path / "here"
    present.write_bytes(b"")
    assert fileio.exists(present) is True
    assert fileio.exists(tmp_path / "gone") is False


def test_info_and_sizes(tmp_path):
    target = tmp_path / "sized"
    target.write_bytes(b"12345")
    assert fileio.info(target).st_size == len(b"12345")
    assert fileio.size(target) == len(b"12345")
    assert fileio.size_strict(target) == len(b"12345")


def test_size_of_missing(tmp_path):
    assert fileio.size(tmp_path / "missing") == 0
    with pytest.raises(FileNotFoundError):
        fileio.size_strict(tmp_path / "missing")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("archive.tar.gz", "gz"),
        ("noext", ""),
        ("dir.d/file", ""),
        (".bashrc", "bashrc"),
    ],
)
def test_ext(name, expected):
    assert fileio.ext(name) == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("a/b/", "b"),
        ("a/b/c.txt", "c.txt"),
        ("", "."),
        ("///", "/"),
    ],
)
def test_filename(path, expected):
    assert fileio.filename(path) == expected


def test_split_path():
    assert fileio.split_path("a/b/c.txt") == ("a/b", "c.txt", "a/b/c.txt")
    parts = fileio.split_path("c.txt")
    assert parts.directory == "."
    assert parts.full == "c.txt"


def test_create_directory_with_subdirs(tmp_path):
    root = tmp_path / "vol"
    fileio.create_directory(root, "x", "y/z")
    assert root.is_dir()
    assert (root / "x").is_dir()
    assert (root / "y" / "z").is_dir()


def test_save_creates_parents(tmp_path):
    target = tmp_path / "p" / "q" / "file.bin"
    fileio.save(target, b"body")
    assert target.read_bytes() == b"body"


def test_save_parts_joins(tmp_path):
    fileio.save_parts(b"body", str(tmp_path), "dir", "file.bin")
    assert (tmp_path / "dir" / "file.bin").read_bytes() == b"body"


def test_open_writer_truncates_and_writes_lines(tmp_path):
    target = tmp_path / "out.txt"
    target.write_bytes(b"previous content")
    with fileio.open_writer(target) as writer:
        writer.write_line(b"alpha")
        writer.write(b"beta")
    assert target.read_bytes() == b"alpha\nbeta"


def test_delete(tmp_path):
    target = tmp_path / "doomed"
    target.write_bytes(b"")
    fileio.delete(target)
    assert not target.exists()
    with pytest.raises(FileNotFoundError):
        fileio.delete(target)


def test_delete_mask(tmp_path):
    for name in ("a.tmp", "b.tmp", "keep.txt"):
        (tmp_path / name).write_bytes(b"")
    fileio.delete_mask(str(tmp_path / "*.tmp"))
    assert sorted(p.name for p in tmp_path.iterdir()) == ["keep.txt"]


def test_delete_directory(tmp_path):
    root = tmp_path / "tree"
    (root / "inner").mkdir(parents=True)
    (root / "inner" / "f").write_bytes(b"x")
    fileio.delete_directory(root)
    assert not root.exists()
    fileio.delete_directory(root)
    assert not root.exists()


def test_directory_sorted(tmp_path):
    for name in ("b", "a", "c"):
        (tmp_path / name).write_bytes(b"")
    assert [entry.name for entry in fileio.directory(tmp_path)] == ["a", "b", "c"]


def test_directory_missing_is_empty(tmp_path):
    assert fileio.directory(tmp_path / "missing") == []


def test_file_list(tmp_path):
    (tmp_path / "a.txt").write_bytes(b"")
    (tmp_path / "b.log").write_bytes(b"")
    (tmp_path / "sub").mkdir()
    base = str(tmp_path)
    assert fileio.file_list(base) == [
        os.path.join(base, "a.txt"),
        os.path.join(base, "b.log"),
    ]
    assert fileio.file_list(base, ".log") == [os.path.join(base, "b.log")]


def test_files_recursive(tmp_path):
    (tmp_path / "a.txt").write_bytes(b"")
    (tmp_path / "sub" / "deep").mkdir(parents=True)
    (tmp_path / "sub" / "b.txt").write_bytes(b"")
    (tmp_path / "sub" / "deep" / "c.log").write_bytes(b"")
    base = str(tmp_path)
    assert sorted(fileio.files(base)) == sorted(
        [
            os.path.join(base, "a.txt"),
            os.path.join(base, "sub", "b.txt"),
            os.path.join(base, "sub", "deep", "c.log"),
        ]
    )
    assert fileio.files(base, ".log") == [os.path.join(base, "sub", "deep", "c.log")]


def test_line_count(tmp_path):
    target = tmp_path / "lines"
    target.write_bytes(b"a\nb\nc")
    assert fileio.line_count(target) == 2
    with pytest.raises(FileNotFoundError):
        fileio.line_count(tmp_path / "missing")