"""Unit tests for the Arena and NodeId classes."""

import pytest

from walktree.tree.arena import Arena, NodeId


@pytest.fixture
def family():
    """parent with children first, middle, last, and a detached node."""
    arena = Arena()
    parent = arena.new_node("parent")
    first = arena.new_node("first")
    middle = arena.new_node("middle")
    last = arena.new_node("last")
    detached = arena.new_node("detached")
    for child in (first, middle, last):
        arena.append(parent, child)
    return arena, parent, first, middle, last, detached


def test_new_node_allocates_sequential_ids():
    arena = Arena()
    ids = [arena.new_node(value) for value in "abc"]
    assert [node_id.index for node_id in ids] == [0, 1, 2]
    assert len(arena) == 3
    assert list(arena) == ids
    assert arena.get(ids[1]).data == "b"


def test_node_ids_are_scoped_to_their_arena():
    first = Arena()
    second = Arena()
    first_id = first.new_node("x")
    second_id = second.new_node("x")

    assert first_id.index == second_id.index
    assert first_id != second_id
    assert second.get(first_id) is None
    assert first.get(second_id) is None


def test_node_id_hash_and_repr():
    arena = Arena()
    node_id = arena.new_node(None)
    assert {node_id: 1}[arena.get(node_id).node_id] == 1
    assert repr(node_id) == "NodeId(0)"
    assert node_id != 0


def test_get_rejects_non_ids():
    arena = Arena()
    arena.new_node(None)
    assert arena.get("0") is None


def test_structure(family):
    arena, parent, first, middle, last, detached = family
    assert arena.children(parent) == (first, middle, last)
    assert arena.parent(first) == parent
    assert arena.parent(parent) is None
    assert arena.first_child(parent) == first
    assert arena.last_child(parent) == last
    assert arena.first_child(first) is None
    assert arena.children(detached) == ()


def test_siblings(family):
    arena, parent, first, middle, last, detached = family
    assert arena.previous_sibling(first) is None
    assert arena.next_sibling(first) == middle
    assert arena.previous_sibling(middle) == first
    assert arena.next_sibling(middle) == last
    assert arena.next_sibling(last) is None
    assert arena.next_sibling(parent) is None
    assert arena.previous_sibling(detached) is None


def test_append_rejects_reparenting(family):
    arena, parent, first, middle, last, detached = family
    with pytest.raises(ValueError, match="already has a parent"):
        arena.append(detached, first)


def test_append_rejects_foreign_ids(family):
    arena = family[0]
    foreign = Arena().new_node(None)
    with pytest.raises(KeyError):
        arena.append(family[1], foreign)


def test_sealed_arena_refuses_changes(family):
    arena, parent, first, middle, last, detached = family
    assert not arena.sealed
    arena.seal()
    assert arena.sealed
    with pytest.raises(RuntimeError, match="sealed"):
        arena.new_node("late")
    with pytest.raises(RuntimeError, match="sealed"):
        arena.append(parent, detached)
    # Queries still work
    assert arena.children(parent) == (first, middle, last)


def test_foreign_queries_are_empty(family):
    arena = family[0]
    foreign = Arena().new_node(None)
    assert arena.parent(foreign) is None
    assert arena.children(foreign) == ()
    assert arena.next_sibling(foreign) is None
    assert isinstance(foreign, NodeId)
