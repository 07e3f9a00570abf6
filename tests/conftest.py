"""Test configuration and fixtures for walktree."""

import pytest

from walktree.traversal.entry import Entry
from walktree.traversal.provider import TraversalProvider
from walktree.types import FileType


class StaticProvider(TraversalProvider):
    """Provider replaying a fixed list of entries, honouring keep-based pruning."""

    def __init__(self, entries, errors=()):
        self.entries = list(entries)
        self.errors = list(errors)
        self.calls = 0

    def walk(self, root_path, policy, keep=None, on_error=None):
        self.calls += 1
        for error in self.errors:
            self.report(error, on_error)
        pruned = []
        for entry in self.entries:
            if any(parent in pruned for parent in entry.path.parents):
                continue
            if keep is not None and not keep(entry):
                if entry.is_dir:
                    pruned.append(entry.path)
                continue
            yield entry


@pytest.fixture
def static_provider():
    return StaticProvider


@pytest.fixture
def make_entry():
    def _make(path, depth=0, is_dir=False):
        return Entry(path, depth=depth, file_type=FileType.DIRECTORY if is_dir else FileType.FILE)

    return _make


@pytest.fixture
def sample_layout(tmp_path):
    """root/a/x and root/b, the layout used throughout the worked examples."""
    root = tmp_path / "r"
    root.mkdir()
    (root / "a").mkdir()
    (root / "a" / "x").write_text("x")
    (root / "b").write_text("b")
    return root


@pytest.fixture
def nested_layout(tmp_path):
    root = tmp_path / "project"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "src" / "pkg" / "module.py").write_text("pass")
    (root / "src" / "pkg" / "module.pyc").write_bytes(b"\x00")
    (root / "src" / "main.py").write_text("pass")
    (root / "docs").mkdir()
    (root / "docs" / "index.md").write_text("# Docs")
    (root / "build").mkdir()
    (root / "build" / "out.bin").write_bytes(b"\x00")
    (root / "README.md").write_text("readme")
    return root
