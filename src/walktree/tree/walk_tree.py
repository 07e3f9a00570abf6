"""Read-only query surface over an assembled tree."""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Iterator, Optional, Sequence, Tuple, TypeVar

from anytree import ContStyle, PreOrderIter, RenderTree

from walktree.exceptions import TraversalError
from walktree.tree.arena import Arena, NodeId
from walktree.tree.path_index import PathIndex
from walktree.types import PathType

if TYPE_CHECKING:
    from walktree.builder import WalkTreeBuilder

T = TypeVar("T")


class WalkTree(Generic[T]):
    """An immutable tree of user data keyed by filesystem path.

    A WalkTree is produced by WalkTreeBuilder.walk() and owns the arena holding its
    nodes together with the bijective index between paths and NodeIds. It exposes
    lookups in both directions and the parent/children structure established during
    assembly. There is no way to modify a tree once built; to change it, walk again.

    Nodes whose parent directory was not collected (the walk root, or entries below a
    directory hidden by a minimum depth) are roots. The structure is therefore a forest
    in general, and a single tree in the common case.

    Attributes:
        errors (Tuple[TraversalError, ...]): Traversal errors collected during the walk
            when the builder used ErrorAction.COLLECT; empty otherwise.

    Example:
        >>> tree = (
        ...     WalkTree.load("/r")  # doctest: +SKIP
        ...     .with_map(lambda entry: entry.path)
        ...     .with_traversal_option(SortByFileName())
        ...     .walk()
        ... )
        >>> root = tree.node_by_path("/r")  # doctest: +SKIP
        >>> [str(tree.path_by_node(child)) for child in tree.children(root)]  # doctest: +SKIP
        ['/r/a', '/r/b']
    """

    def __init__(
        self,
        arena: Arena[T],
        index: PathIndex,
        sequence: Sequence[NodeId],
        errors: Sequence[TraversalError] = (),
    ) -> None:
        """Wrap an assembled arena. Use WalkTreeBuilder.walk() rather than calling this directly.

        Args:
            arena: Arena holding every node, already linked.
            index: Path index covering every node of the arena.
            sequence: Node ids in the order their entries were produced.
            errors: Traversal errors collected during the walk.
        """
        self._arena = arena
        self._index = index
        self._sequence = tuple(sequence)
        self._roots = tuple(node_id for node_id in self._sequence if arena.parent(node_id) is None)
        self.errors: Tuple[TraversalError, ...] = tuple(errors)

    @staticmethod
    def load(root_path: PathType) -> "WalkTreeBuilder[Any]":
        """Start configuring a walk rooted at ``root_path``. No I/O happens until walk()."""
        from walktree.builder import WalkTreeBuilder

        return WalkTreeBuilder.load(root_path)

    def node_by_path(self, path: PathType) -> Optional[NodeId]:
        """Return the NodeId stored under ``path``, or None."""
        return self._index.node_for(path)

    def path_by_node(self, node_id: NodeId) -> Optional[Path]:
        """Return the path of ``node_id``, or None for a handle foreign to this tree."""
        return self._index.path_for(node_id)

    def data_by_path(self, path: PathType) -> Optional[T]:
        node_id = self.node_by_path(path)
        if node_id is None:
            return None
        return self.data_by_node(node_id)

    def data_by_node(self, node_id: NodeId) -> Optional[T]:
        node = self._arena.get(node_id)
        if node is None:
            return None
        return node.data

    def parent(self, node_id: NodeId) -> Optional[NodeId]:
        return self._arena.parent(node_id)

    def children(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        """Children of ``node_id`` in the order the walk produced them."""
        return self._arena.children(node_id)

    def first_child(self, node_id: NodeId) -> Optional[NodeId]:
        return self._arena.first_child(node_id)

    def last_child(self, node_id: NodeId) -> Optional[NodeId]:
        return self._arena.last_child(node_id)

    def previous_sibling(self, node_id: NodeId) -> Optional[NodeId]:
        return self._arena.previous_sibling(node_id)

    def next_sibling(self, node_id: NodeId) -> Optional[NodeId]:
        return self._arena.next_sibling(node_id)

    def roots(self) -> Tuple[NodeId, ...]:
        """Nodes without a parent, in the order the walk produced them."""
        return self._roots

    def ancestors(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        """Ancestors of ``node_id``, starting from its root."""
        node = self._arena.get(node_id)
        if node is None:
            return ()
        return tuple(ancestor.node_id for ancestor in node.ancestors)

    def descendants(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        """Descendants of ``node_id`` in pre-order, excluding the node itself."""
        node = self._arena.get(node_id)
        if node is None:
            return ()
        return tuple(descendant.node_id for descendant in PreOrderIter(node) if descendant is not node)

    def depth(self, node_id: NodeId) -> Optional[int]:
        """Number of edges between ``node_id`` and its root."""
        node = self._arena.get(node_id)
        if node is None:
            return None
        return node.depth

    def nodes(self) -> Iterator[NodeId]:
        """All NodeIds in the order the walk produced them."""
        return iter(self._sequence)

    def paths(self) -> Iterator[Path]:
        """All paths in the order the walk produced them."""
        return (self._index.path_for(node_id) for node_id in self._sequence)  # type: ignore[misc]

    def items(self) -> Iterator[Tuple[Path, T]]:
        """(path, data) pairs in the order the walk produced them."""
        for node_id in self._sequence:
            node = self._arena.get(node_id)
            yield self._index.path_for(node_id), node.data  # type: ignore[misc,union-attr]

    def stream_tree_representation(self, label: Optional[Callable[[Path, T], str]] = None) -> Iterator[str]:
        """Generate a tree drawing one line at a time.

        Each root is drawn with its full path, every other node with its file name,
        children in their stored order, using the connectors of the Unix ``tree``
        command.

        Args:
            label: Optional function building the text of a node from its path and
                data. Defaults to the name rules above.

        Yields:
            Lines of the drawing.

        Example:
            >>> for line in tree.stream_tree_representation():  # doctest: +SKIP
            ...     print(line)
            /r
            ├── a
            │   └── x
            └── b
        """
        for root_id in self._roots:
            root_node = self._arena.get(root_id)
            for prefix, _, node in RenderTree(root_node, style=ContStyle()):
                path = self._index.path_for(node.node_id)
                if label is not None:
                    text = label(path, node.data)  # type: ignore[arg-type]
                elif node is root_node:
                    text = str(path)
                else:
                    text = path.name  # type: ignore[union-attr]
                yield f"{prefix}{text}"

    def get_tree_representation(self, label: Optional[Callable[[Path, T], str]] = None) -> str:
        """Return the complete drawing produced by stream_tree_representation()."""
        return "\n".join(self.stream_tree_representation(label))

    def _content(self) -> Dict[Path, Tuple[Any, Optional[Path], Tuple[Path, ...]]]:
        content = {}
        for node_id in self._sequence:
            parent_id = self._arena.parent(node_id)
            content[self._index.path_for(node_id)] = (
                self._arena.get(node_id).data,  # type: ignore[union-attr]
                self._index.path_for(parent_id) if parent_id is not None else None,
                tuple(self._index.path_for(child) for child in self._arena.children(node_id)),
            )
        return content  # type: ignore[return-value]

    def __eq__(self, other: Any) -> bool:
        """Trees are equal when they hold the same paths, data and edges.

        NodeIds are not compared; two walks of the same directory produce equal trees.
        """
        if not isinstance(other, WalkTree):
            return NotImplemented
        return self._content() == other._content()

    __hash__ = None  # type: ignore[assignment]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, NodeId):
            return self._arena.get(item) is not None
        return item in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[NodeId]:
        return self.nodes()

    def __repr__(self) -> str:
        return f"WalkTree(nodes={len(self)}, roots={len(self._roots)}, errors={len(self.errors)})"
