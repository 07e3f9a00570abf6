"""Unit tests for the Entry class."""

import os
from pathlib import Path

from walktree.traversal.entry import Entry
from walktree.types import FileType


def test_entry_initialization():
    entry = Entry("/r/a/x.txt", depth=2)
    assert entry.path == Path("/r/a/x.txt")
    assert entry.name == "x.txt"
    assert entry.depth == 2
    assert entry.file_type is FileType.FILE
    assert entry.is_file
    assert not entry.is_dir
    assert not entry.is_symlink
    assert entry.symlink_target is None


def test_directory_entry():
    entry = Entry("/r/a", depth=1, file_type=FileType.DIRECTORY)
    assert entry.is_dir
    assert not entry.is_file


def test_symlink_entry():
    entry = Entry("/r/link", depth=1, file_type=FileType.SYMLINK, is_symlink=True, symlink_target="a")
    assert entry.is_symlink
    assert not entry.is_dir
    assert not entry.is_file
    assert entry.symlink_target == "a"


def test_stat_uses_provided_result(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("hello")
    provided = os.stat(tmp_path)
    entry = Entry(target, stat_result=provided)
    assert entry.stat() is provided


def test_stat_reads_filesystem(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("hello")
    entry = Entry(target)
    assert entry.stat().st_size == 5
    # Cached after the first call
    assert entry.stat() is entry.stat()


def test_repr():
    entry = Entry("/r/a", depth=1, file_type=FileType.DIRECTORY)
    assert repr(entry) == "Entry(path='/r/a', depth=1, file_type=directory)"
