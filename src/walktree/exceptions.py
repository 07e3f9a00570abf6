from pathlib import Path
from typing import Optional

from walktree.types import PathType


class WalkTreeError(Exception):
    """
    Base class for every error raised while configuring, walking or assembling a tree.

    Catching this class catches all failures of the terminal ``walk()`` operation that
    originate in this package. Exceptions raised by user-supplied filters or mappers are
    not wrapped and propagate unchanged.
    """

    pass


class ConfigurationError(WalkTreeError):
    """
    Exception raised when the builder state cannot produce a valid walk.

    This covers a missing mapper, more than one sort discipline, a minimum depth greater
    than the maximum depth, and malformed option values. It is always raised before the
    traversal provider is invoked, so no filesystem access has happened when it surfaces.

    Example:
        >>> error = ConfigurationError("a mapper must be supplied with with_map() before walk()")
        >>> str(error)
        'a mapper must be supplied with with_map() before walk()'
    """

    pass


class TraversalError(WalkTreeError):
    """
    Exception describing an entry the traversal provider could not produce.

    Raised (or collected, depending on the configured ErrorAction) when a directory cannot
    be read, an entry cannot be inspected, or a followed symbolic link leads back to one of
    its own ancestors.

    Attributes:
        path (Path): The path that could not be visited.
        cause (Optional[BaseException]): The underlying OSError, if any.

    Example:
        >>> error = TraversalError("/srv/private", PermissionError(13, "Permission denied"))
        >>> str(error)
        'Cannot traverse /srv/private: [Errno 13] Permission denied'
        >>> error.path.name
        'private'
    """

    def __init__(self, path: PathType, cause: Optional[BaseException] = None, message: Optional[str] = None) -> None:
        """
        Initialize the exception with the offending path.

        Args:
            path (PathType): Path the provider failed on.
            cause (Optional[BaseException]): The error reported by the operating system.
            message (Optional[str]): Explanation used instead of the cause's text.
        """
        self.path = Path(path)
        self.cause = cause
        detail = message if message is not None else (str(cause) if cause is not None else "unknown error")
        super().__init__(f"Cannot traverse {self.path}: {detail}")


class DuplicatePathError(WalkTreeError):
    """
    Exception raised when two entries resolve to the same path.

    A path may own exactly one node. Receiving it twice means the entry stream is corrupt,
    so assembly stops instead of overwriting the first node.

    Attributes:
        path (Path): The repeated path.

    Example:
        >>> error = DuplicatePathError("/r/a")
        >>> str(error)
        'Duplicate path in entry stream: /r/a'
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)
        super().__init__(f"Duplicate path in entry stream: {self.path}")
