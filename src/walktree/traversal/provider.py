from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterator, Optional

from walktree.exceptions import TraversalError
from walktree.options import TraversalPolicy
from walktree.traversal.entry import Entry

KeepPredicate = Callable[[Entry], bool]
ErrorHandler = Callable[[TraversalError], None]


class TraversalProvider(ABC):
    """
    Abstract source of traversal entries.

    A provider turns a root path and a TraversalPolicy into a stream of entries. The
    default implementation walks the local filesystem (see FileSystemWalker); other
    implementations can replay recorded listings, read archives, or list remote stores,
    as long as they honour the same contract:

    - entries are yielded in the order they should appear among their siblings;
    - ``keep`` is consulted for every visited entry, and when it rejects a directory
      nothing below that directory is visited (prune semantics);
    - failures are reported through ``on_error`` as TraversalError instances. When no
      handler is given the error is raised. A handler that raises aborts the walk.

    Example:
        >>> class StaticProvider(TraversalProvider):
        ...     def __init__(self, entries):
        ...         self.entries = entries
        ...     def walk(self, root_path, policy, keep=None, on_error=None):
        ...         for entry in self.entries:
        ...             if keep is None or keep(entry):
        ...                 yield entry
        >>> provider = StaticProvider([Entry("/r"), Entry("/r/b", depth=1)])
        >>> [str(e.path) for e in provider.walk(Path("/r"), TraversalPolicy())]
        ['/r', '/r/b']
    """

    @abstractmethod
    def walk(
        self,
        root_path: Path,
        policy: TraversalPolicy,
        keep: Optional[KeepPredicate] = None,
        on_error: Optional[ErrorHandler] = None,
    ) -> Iterator[Entry]:
        """
        Yield the entries below and including ``root_path``.

        Args:
            root_path (Path): Where the walk starts.
            policy (TraversalPolicy): Depth, ordering, link and device settings.
            keep (Optional[KeepPredicate]): Returns False for entries to drop; dropped
                directories are not descended.
            on_error (Optional[ErrorHandler]): Receives entries that could not be produced.

        Yields:
            Entry: Each produced entry, in traversal order.
        """
        pass

    @staticmethod
    def report(error: TraversalError, on_error: Optional[ErrorHandler]) -> None:
        """Deliver an error to the handler, raising it when there is none."""
        if on_error is None:
            raise error
        on_error(error)
