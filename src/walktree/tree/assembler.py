"""Two-pass assembly of (path, data) pairs into a WalkTree."""

import logging
from pathlib import Path
from typing import Generic, Iterable, List, Sequence, Tuple, TypeVar

from walktree.exceptions import TraversalError
from walktree.tree.arena import Arena, NodeId
from walktree.tree.path_index import PathIndex
from walktree.tree.walk_tree import WalkTree

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TreeAssembler(Generic[T]):
    """Build a WalkTree from an ordered sequence of (path, data) pairs.

    Pass one allocates a node for every pair and indexes its path, recording the order
    the pairs arrived in. Pass two replays that recorded order and attaches each node to
    the node of its parent directory, when that directory was collected. Because the
    replay follows the recorded order, every node's children end up in the order their
    entries were produced, whatever order the index would iterate in.

    Nodes whose parent directory is missing from the input stay unattached and become
    roots. This is not an error: the walk root has no collected parent, and neither
    do entries whose ancestors were hidden by a minimum depth.

    Example:
        >>> pairs = [(Path("/r"), "root"), (Path("/r/b"), "b"), (Path("/r/a"), "a")]
        >>> tree = TreeAssembler().assemble(pairs)
        >>> [str(tree.path_by_node(n)) for n in tree.children(tree.node_by_path("/r"))]
        ['/r/b', '/r/a']
    """

    def assemble(self, pairs: Iterable[Tuple[Path, T]], errors: Sequence[TraversalError] = ()) -> WalkTree[T]:
        """Assemble the pairs into a finished tree.

        Args:
            pairs: (path, data) pairs in production order.
            errors: Traversal errors to report on the finished tree.

        Returns:
            The assembled tree. Nothing is published if assembly fails.

        Raises:
            DuplicatePathError: If two pairs carry the same path.
        """
        arena: Arena[T] = Arena()
        index = PathIndex()
        sequence: List[NodeId] = []

        for path, data in pairs:
            node_id = arena.new_node(data)
            index.insert(path, node_id)
            sequence.append(node_id)

        for node_id in sequence:
            path = index.path_for(node_id)
            parent_path = path.parent  # type: ignore[union-attr]
            if parent_path == path:
                continue
            parent_id = index.node_for(parent_path)
            if parent_id is not None:
                arena.append(parent_id, node_id)

        arena.seal()
        logger.debug("Assembled %d nodes", len(sequence))
        return WalkTree(arena, index, sequence, errors)
