"""Composite filter combining several predicates."""

from typing import Callable, List, Sequence

from walktree.traversal.entry import Entry

from .base_filter import BaseEntryFilter

EntryPredicate = Callable[[Entry], bool]


class CompositeFilter(BaseEntryFilter):
    """Filter that keeps an entry only if every constituent predicate keeps it.

    Constituents may be BaseEntryFilter instances or plain callables returning True for
    entries to keep. Evaluation stops at the first constituent that rejects the entry,
    so cheap predicates should come first.

    Attributes:
        filters (List[EntryPredicate]): The constituent predicates, in evaluation order.

    Example:
        >>> from walktree.filters.git_filter import GitIgnoreFilter
        >>> git_filter = GitIgnoreFilter("/r")
        >>> git_filter.add_rule("*.log")
        >>> shallow = lambda entry: entry.depth <= 1
        >>> composite = CompositeFilter([git_filter, shallow])
        >>> composite(Entry("/r/app.log", depth=1))
        False
        >>> composite(Entry("/r/a/b.txt", depth=2))
        False
        >>> composite(Entry("/r/b.txt", depth=1))
        True
    """

    def __init__(self, filters: Sequence[EntryPredicate]):
        """Initialize the composite.

        Args:
            filters: Predicates to combine.

        Raises:
            ValueError: If no predicate is given.
            TypeError: If any item is not callable.
        """
        if not filters:
            raise ValueError("At least one filter must be provided")

        for i, entry_filter in enumerate(filters):
            if not callable(entry_filter):
                raise TypeError(f"Filter at index {i} must be callable, got {type(entry_filter)}")

        self.filters: List[EntryPredicate] = list(filters)

    def exclude(self, entry: Entry) -> bool:
        return not all(entry_filter(entry) for entry_filter in self.filters)

    def add_filter(self, entry_filter: EntryPredicate) -> None:
        """Append another predicate.

        Raises:
            TypeError: If ``entry_filter`` is not callable.
        """
        if not callable(entry_filter):
            raise TypeError(f"Filter must be callable, got {type(entry_filter)}")
        self.filters.append(entry_filter)

    def __len__(self) -> int:
        return len(self.filters)
