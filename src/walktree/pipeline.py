"""Filtering, mapping and error handling between the provider and the assembler."""

import logging
from pathlib import Path
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from walktree.error_action import ErrorAction
from walktree.exceptions import TraversalError
from walktree.options import TraversalPolicy
from walktree.traversal.entry import Entry
from walktree.traversal.provider import TraversalProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntryPipeline(Generic[T]):
    """Turn a provider's entry stream into the (path, data) pairs the assembler consumes.

    The filter is handed to the provider as its keep predicate, so a rejected directory
    is never descended. Every surviving entry is passed to the mapper in traversal order.
    Traversal errors are handled according to ``error_action``:

    - RAISE stops at the first error and raises it.
    - COLLECT logs each error as a warning and returns it with the pairs.
    - IGNORE logs each error at debug level and drops it.

    Exceptions raised by the filter or the mapper are not caught.

    Attributes:
        mapper (Callable[[Entry], T]): Produces the data stored for an entry.
        entry_filter (Optional[Callable[[Entry], bool]]): Returns False for entries to drop.
        error_action (ErrorAction): Policy for traversal errors.
    """

    def __init__(
        self,
        mapper: Callable[[Entry], T],
        entry_filter: Optional[Callable[[Entry], bool]] = None,
        error_action: ErrorAction = ErrorAction.COLLECT,
    ) -> None:
        self.mapper = mapper
        self.entry_filter = entry_filter
        self.error_action = ErrorAction(error_action)

    def run(
        self, provider: TraversalProvider, root_path: Path, policy: TraversalPolicy
    ) -> Tuple[List[Tuple[Path, T]], List[TraversalError]]:
        """Drive the provider to completion.

        Args:
            provider: Source of entries.
            root_path: Where the walk starts.
            policy: Settled traversal policy.

        Returns:
            The (path, data) pairs in traversal order and the collected errors (always
            empty unless the action is COLLECT).

        Raises:
            TraversalError: On the first traversal error when the action is RAISE.
        """
        errors: List[TraversalError] = []

        def on_error(error: TraversalError) -> None:
            if self.error_action == ErrorAction.RAISE:
                raise error
            if self.error_action == ErrorAction.COLLECT:
                logger.warning("%s", error)
                errors.append(error)
            else:
                logger.debug("Ignoring traversal error: %s", error)

        entries = provider.walk(root_path, policy, self.entry_filter, on_error)
        pairs = [(entry.path, self.mapper(entry)) for entry in entries]
        return pairs, errors
