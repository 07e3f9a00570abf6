"""Bijective mapping between paths and node identities."""

import os
from pathlib import Path
from typing import Dict, Iterator, Optional

from walktree.exceptions import DuplicatePathError
from walktree.tree.arena import NodeId
from walktree.types import PathType


class PathIndex:
    """One-to-one mapping between paths and NodeIds, queryable in both directions.

    The mapping is kept as two plain dictionaries that are only ever updated together.
    Iteration order is not relied upon for tree structure.

    Example:
        >>> from walktree.tree.arena import Arena
        >>> arena = Arena()
        >>> index = PathIndex()
        >>> node_id = arena.new_node(None)
        >>> index.insert("/r/a", node_id)
        >>> index.node_for("/r/a") == node_id
        True
        >>> str(index.path_for(node_id))
        '/r/a'
        >>> index.insert("/r/a", arena.new_node(None))
        Traceback (most recent call last):
        ...
        walktree.exceptions.DuplicatePathError: Duplicate path in entry stream: /r/a
    """

    def __init__(self) -> None:
        self._by_path: Dict[Path, NodeId] = {}
        self._by_node: Dict[NodeId, Path] = {}

    def insert(self, path: PathType, node_id: NodeId) -> None:
        """Add a pair, refusing anything that would break the bijection.

        Raises:
            DuplicatePathError: If the path or the node is already indexed.
        """
        path = Path(path)
        if path in self._by_path:
            raise DuplicatePathError(path)
        if node_id in self._by_node:
            raise DuplicatePathError(self._by_node[node_id])
        self._by_path[path] = node_id
        self._by_node[node_id] = path

    def node_for(self, path: PathType) -> Optional[NodeId]:
        return self._by_path.get(Path(path))

    def path_for(self, node_id: NodeId) -> Optional[Path]:
        return self._by_node.get(node_id)

    def paths(self) -> Iterator[Path]:
        return iter(self._by_path)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return Path(path) in self._by_path

    def __len__(self) -> int:
        return len(self._by_path)
