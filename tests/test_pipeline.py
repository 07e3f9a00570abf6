"""Unit tests for the EntryPipeline class."""

import logging
from pathlib import Path

import pytest

from walktree.error_action import ErrorAction
from walktree.exceptions import TraversalError
from walktree.options import TraversalPolicy
from walktree.pipeline import EntryPipeline


@pytest.fixture
def entries(make_entry):
    return [
        make_entry("/r", depth=0, is_dir=True),
        make_entry("/r/a", depth=1, is_dir=True),
        make_entry("/r/a/x", depth=2),
        make_entry("/r/b", depth=1),
    ]


@pytest.fixture
def denied():
    return TraversalError("/r/denied", PermissionError(13, "Permission denied"))


def run(pipeline, provider):
    return pipeline.run(provider, Path("/r"), TraversalPolicy())


def test_maps_entries_in_order(static_provider, entries):
    pairs, errors = run(EntryPipeline(lambda entry: entry.depth), static_provider(entries))
    assert pairs == [(Path("/r"), 0), (Path("/r/a"), 1), (Path("/r/a/x"), 2), (Path("/r/b"), 1)]
    assert errors == []


def test_filter_prunes_through_provider(static_provider, entries):
    mapped = []

    def mapper(entry):
        mapped.append(entry.name)
        return entry.name

    pipeline = EntryPipeline(mapper, entry_filter=lambda entry: entry.name != "a")
    pairs, _ = run(pipeline, static_provider(entries))
    assert [str(path) for path, _ in pairs] == ["/r", "/r/b"]
    # The mapper only sees surviving entries
    assert mapped == ["r", "b"]


def test_raise_aborts(static_provider, entries, denied):
    pipeline = EntryPipeline(lambda entry: None, error_action=ErrorAction.RAISE)
    with pytest.raises(TraversalError) as exc_info:
        run(pipeline, static_provider(entries, errors=[denied]))
    assert exc_info.value is denied


def test_collect_returns_errors_and_warns(static_provider, entries, denied, caplog):
    pipeline = EntryPipeline(lambda entry: None, error_action=ErrorAction.COLLECT)
    with caplog.at_level(logging.WARNING, logger="walktree"):
        pairs, errors = run(pipeline, static_provider(entries, errors=[denied]))
    assert len(pairs) == 4
    assert errors == [denied]
    assert "Cannot traverse /r/denied" in caplog.text


def test_ignore_drops_errors(static_provider, entries, denied, caplog):
    pipeline = EntryPipeline(lambda entry: None, error_action="ignore")
    with caplog.at_level(logging.DEBUG, logger="walktree"):
        pairs, errors = run(pipeline, static_provider(entries, errors=[denied]))
    assert len(pairs) == 4
    assert errors == []
    assert "Ignoring traversal error" in caplog.text
    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]


def test_default_action_is_collect():
    assert EntryPipeline(lambda entry: None).error_action is ErrorAction.COLLECT


def test_mapper_errors_propagate(static_provider, entries):
    def mapper(entry):
        raise ValueError(f"cannot map {entry.path}")

    with pytest.raises(ValueError, match="cannot map /r"):
        run(EntryPipeline(mapper), static_provider(entries))
