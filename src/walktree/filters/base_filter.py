from abc import ABC, abstractmethod

from walktree.traversal.entry import Entry


class BaseEntryFilter(ABC):
    """
    Abstract base class for reusable entry filters.

    A filter instance is a callable usable with WalkTreeBuilder.with_filter(): it returns
    True for entries to keep and False for entries to drop. Subclasses implement the
    inverse question, exclude(), which usually reads more naturally for rule sets.

    Example:
        >>> class HiddenFilter(BaseEntryFilter):
        ...     def exclude(self, entry: Entry) -> bool:
        ...         return entry.depth > 0 and entry.name.startswith(".")
        >>> hidden = HiddenFilter()
        >>> hidden(Entry("/r/.git", depth=1))
        False
        >>> hidden(Entry("/r/src", depth=1))
        True
    """

    @abstractmethod
    def exclude(self, entry: Entry) -> bool:
        """
        Determine if an entry should be dropped.

        Args:
            entry (Entry): The entry being considered. For directories, returning True
                also prevents the walk from descending into them.

        Returns:
            bool: True if the entry should be excluded, False if it should be kept.
        """
        pass

    def __call__(self, entry: Entry) -> bool:
        return not self.exclude(entry)
