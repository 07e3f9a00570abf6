"""Traversal providers producing the raw entry stream for tree assembly."""

from walktree.traversal.entry import Entry
from walktree.traversal.provider import TraversalProvider
from walktree.traversal.walker import FileSystemWalker

__all__ = ["Entry", "FileSystemWalker", "TraversalProvider"]
