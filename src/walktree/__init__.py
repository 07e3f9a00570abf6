"""Filesystem walk to in-memory tree assembly.

This package turns the flat stream of entries produced by a directory traversal
into an immutable tree with constant-time lookups between paths and nodes.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from walktree.error_action import ErrorAction
from walktree.exceptions import ConfigurationError, DuplicatePathError, TraversalError, WalkTreeError
from walktree.tree.arena import NodeId
from walktree.tree.walk_tree import WalkTree
from walktree.builder import WalkTreeBuilder
from walktree.options import (
    ContentsFirst,
    FollowLinks,
    MaxDepth,
    MaxOpen,
    MinDepth,
    SameFileSystem,
    SortBy,
    SortByFileName,
    SortByKey,
    TraversalOption,
    TraversalPolicy,
)
from walktree.traversal.entry import Entry
from walktree.traversal.provider import TraversalProvider
from walktree.traversal.walker import FileSystemWalker
from walktree.types import FileType, PathType

# Expose the version for programmatic use
try:
    __version__ = version("walktree")
except PackageNotFoundError:
    __version__ = "unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "ContentsFirst",
    "DuplicatePathError",
    "Entry",
    "ErrorAction",
    "FileSystemWalker",
    "FileType",
    "FollowLinks",
    "MaxDepth",
    "MaxOpen",
    "MinDepth",
    "NodeId",
    "PathType",
    "SameFileSystem",
    "SortBy",
    "SortByFileName",
    "SortByKey",
    "TraversalError",
    "TraversalOption",
    "TraversalPolicy",
    "TraversalProvider",
    "WalkTree",
    "WalkTreeBuilder",
    "WalkTreeError",
    "__version__",
]
