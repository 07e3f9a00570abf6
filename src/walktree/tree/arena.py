"""Arena of tree nodes addressed by opaque identities."""

import itertools
from typing import Any, Generic, Iterator, List, Optional, Tuple, TypeVar

from anytree import NodeMixin

T = TypeVar("T")

_arena_keys = itertools.count()


class NodeId:
    """Opaque handle to a node of one particular arena.

    Handles are hashable and compare equal only to handles of the same node in the same
    arena, so a handle taken from one tree never resolves in another.

    Example:
        >>> arena = Arena()
        >>> node_id = arena.new_node("data")
        >>> node_id == arena.new_node("data")
        False
        >>> arena.get(node_id).data
        'data'
    """

    __slots__ = ("_arena_key", "_index")

    def __init__(self, arena_key: int, index: int) -> None:
        self._arena_key = arena_key
        self._index = index

    @property
    def index(self) -> int:
        """Allocation position of the node within its arena."""
        return self._index

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, NodeId):
            return NotImplemented
        return self._arena_key == other._arena_key and self._index == other._index

    def __hash__(self) -> int:
        return hash((self._arena_key, self._index))

    def __repr__(self) -> str:
        return f"NodeId({self._index})"


class ArenaNode(NodeMixin, Generic[T]):  # type: ignore
    """Slot owned by an arena.

    Holds the user data and, through anytree.NodeMixin, the structural links to the
    parent and the ordered children. Siblings are derived from the parent's children.

    Attributes:
        node_id (NodeId): The handle under which the arena hands this slot out.
        data (T): The user data stored in the node.
    """

    def __init__(self, node_id: NodeId, data: T) -> None:
        super().__init__()
        self.node_id = node_id
        self.data = data

    def __repr__(self) -> str:
        return f"ArenaNode({self.node_id!r}, data={self.data!r})"


class Arena(Generic[T]):
    """Owner of every node in a tree.

    Nodes are allocated once and never removed. Once sealed, the arena refuses any
    further allocation or linking.
    """

    def __init__(self) -> None:
        self._key = next(_arena_keys)
        self._nodes: List[ArenaNode[T]] = []
        self._sealed = False

    def new_node(self, data: T) -> NodeId:
        """Allocate a detached node holding ``data`` and return its handle."""
        self._check_writable()
        node_id = NodeId(self._key, len(self._nodes))
        self._nodes.append(ArenaNode(node_id, data))
        return node_id

    def append(self, parent_id: NodeId, child_id: NodeId) -> None:
        """Attach ``child_id`` as the last child of ``parent_id``.

        Raises:
            KeyError: If either handle does not belong to this arena.
            ValueError: If the child is already attached.
        """
        self._check_writable()
        parent = self._require(parent_id)
        child = self._require(child_id)
        if child.parent is not None:
            raise ValueError(f"{child_id!r} already has a parent")
        child.parent = parent

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def get(self, node_id: NodeId) -> Optional[ArenaNode[T]]:
        """Return the slot behind ``node_id``, or None if it is not from this arena."""
        if not isinstance(node_id, NodeId) or node_id._arena_key != self._key:
            return None
        return self._nodes[node_id._index]

    def parent(self, node_id: NodeId) -> Optional[NodeId]:
        node = self.get(node_id)
        if node is None or node.parent is None:
            return None
        return node.parent.node_id

    def children(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        node = self.get(node_id)
        if node is None:
            return ()
        return tuple(child.node_id for child in node.children)

    def first_child(self, node_id: NodeId) -> Optional[NodeId]:
        children = self.children(node_id)
        return children[0] if children else None

    def last_child(self, node_id: NodeId) -> Optional[NodeId]:
        children = self.children(node_id)
        return children[-1] if children else None

    def previous_sibling(self, node_id: NodeId) -> Optional[NodeId]:
        return self._sibling(node_id, -1)

    def next_sibling(self, node_id: NodeId) -> Optional[NodeId]:
        return self._sibling(node_id, 1)

    def _sibling(self, node_id: NodeId, step: int) -> Optional[NodeId]:
        node = self.get(node_id)
        if node is None or node.parent is None:
            return None
        siblings = node.parent.children
        position = siblings.index(node) + step
        if 0 <= position < len(siblings):
            return siblings[position].node_id
        return None

    def _require(self, node_id: NodeId) -> ArenaNode[T]:
        node = self.get(node_id)
        if node is None:
            raise KeyError(node_id)
        return node

    def _check_writable(self) -> None:
        if self._sealed:
            raise RuntimeError("arena is sealed; build a new tree instead of modifying this one")

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[NodeId]:
        return (node.node_id for node in self._nodes)
