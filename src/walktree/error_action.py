"""Error action enum for handling traversal errors during a walk."""

from enum import Enum


class ErrorAction(str, Enum):
    """Action to take when the traversal provider fails to produce an entry.

    Values:
        RAISE: Abort the walk and raise the first TraversalError
        COLLECT: Keep walking; report every error on the finished tree (default behavior)
        IGNORE: Keep walking and drop errors silently
    """

    RAISE = "raise"
    COLLECT = "collect"
    IGNORE = "ignore"
