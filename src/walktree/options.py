"""Traversal options accepted by the builder and the policy they compile into.

Each option is a small immutable value. The builder keeps them in the order they were
supplied; compile_policy() folds that list into a single TraversalPolicy, with the last
value winning for options that are given more than once.
"""

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

from walktree.exceptions import ConfigurationError

if TYPE_CHECKING:
    from walktree.traversal.entry import Entry

DEFAULT_MAX_OPEN = 10


@dataclass(frozen=True)
class ContentsFirst:
    """Yield a directory's contents before the directory itself."""


@dataclass(frozen=True)
class FollowLinks:
    """Descend into directories reached through symbolic links."""


@dataclass(frozen=True)
class MaxDepth:
    """Do not yield or descend into entries deeper than ``depth`` (the root is depth 0)."""

    depth: int


@dataclass(frozen=True)
class MaxOpen:
    """Keep at most ``count`` directory handles open at once."""

    count: int


@dataclass(frozen=True)
class MinDepth:
    """Do not yield entries shallower than ``depth``."""

    depth: int


@dataclass(frozen=True)
class SameFileSystem:
    """Do not cross into directories that live on another device than the root."""


@dataclass(frozen=True)
class SortBy:
    """Order siblings with a ``cmp``-style comparator over two entries."""

    comparator: Callable[["Entry", "Entry"], int]


@dataclass(frozen=True)
class SortByFileName:
    """Order siblings by file name."""


@dataclass(frozen=True)
class SortByKey:
    """Order siblings by the value ``key(entry)``."""

    key: Callable[["Entry"], Any]


TraversalOption = Union[
    ContentsFirst,
    FollowLinks,
    MaxDepth,
    MaxOpen,
    MinDepth,
    SameFileSystem,
    SortBy,
    SortByFileName,
    SortByKey,
]

_OPTION_TYPES = (
    ContentsFirst,
    FollowLinks,
    MaxDepth,
    MaxOpen,
    MinDepth,
    SameFileSystem,
    SortBy,
    SortByFileName,
    SortByKey,
)
_SORT_TYPES = (SortBy, SortByFileName, SortByKey)


def _file_name(entry: "Entry") -> str:
    return entry.name


@dataclass(frozen=True)
class TraversalPolicy:
    """The settled traversal policy handed to a traversal provider.

    Attributes:
        contents_first (bool): Yield directory contents before the directory.
        follow_links (bool): Descend through symbolic links to directories.
        max_depth (Optional[int]): Deepest level yielded, None for unbounded.
        max_open (int): Maximum number of simultaneously open directory handles.
        min_depth (int): Shallowest level yielded.
        same_file_system (bool): Refuse to cross device boundaries.
        sort_key (Optional[Callable[[Entry], Any]]): Key used to order siblings, None keeps
            the order the operating system lists them in.
    """

    contents_first: bool = False
    follow_links: bool = False
    max_depth: Optional[int] = None
    max_open: int = DEFAULT_MAX_OPEN
    min_depth: int = 0
    same_file_system: bool = False
    sort_key: Optional[Callable[["Entry"], Any]] = None


def check_compatibility(options: Sequence[TraversalOption]) -> None:
    """Validate an option list without touching the filesystem.

    Args:
        options: Options in the order they were supplied.

    Raises:
        ConfigurationError: If an item is not a traversal option, an option carries an
            invalid value, more than one sort discipline was supplied, or the effective
            minimum depth exceeds the effective maximum depth.

    Example:
        >>> check_compatibility([MinDepth(1), MaxDepth(3), SortByFileName()])
        >>> check_compatibility([SortByFileName(), SortByKey(len)])
        Traceback (most recent call last):
        ...
        walktree.exceptions.ConfigurationError: only one sort discipline may be supplied, got SortByFileName, SortByKey
    """
    sorts = []
    min_depth = 0
    max_depth: Optional[int] = None

    for option in options:
        if not isinstance(option, _OPTION_TYPES):
            raise ConfigurationError(f"not a traversal option: {option!r}")
        if isinstance(option, (MaxDepth, MinDepth)):
            if not isinstance(option.depth, int) or option.depth < 0:
                raise ConfigurationError(
                    f"{type(option).__name__} requires a non-negative integer, got {option.depth!r}"
                )
            if isinstance(option, MaxDepth):
                max_depth = option.depth
            else:
                min_depth = option.depth
        elif isinstance(option, MaxOpen):
            if not isinstance(option.count, int) or option.count < 1:
                raise ConfigurationError(f"MaxOpen requires a positive integer, got {option.count!r}")
        elif isinstance(option, SortBy) and not callable(option.comparator):
            raise ConfigurationError("SortBy requires a callable comparator")
        elif isinstance(option, SortByKey) and not callable(option.key):
            raise ConfigurationError("SortByKey requires a callable key")

        if isinstance(option, _SORT_TYPES):
            sorts.append(type(option).__name__)

    if len(sorts) > 1:
        raise ConfigurationError(f"only one sort discipline may be supplied, got {', '.join(sorts)}")
    if max_depth is not None and min_depth > max_depth:
        raise ConfigurationError(f"minimum depth {min_depth} exceeds maximum depth {max_depth}")


def compile_policy(options: Sequence[TraversalOption]) -> TraversalPolicy:
    """Fold an option list into a TraversalPolicy.

    The list is assumed to have passed check_compatibility().

    Args:
        options: Options in the order they were supplied.

    Returns:
        The resulting policy.

    Example:
        >>> policy = compile_policy([MaxDepth(5), FollowLinks(), MaxDepth(2)])
        >>> policy.max_depth, policy.follow_links, policy.contents_first
        (2, True, False)
    """
    settings = {}
    for option in options:
        if isinstance(option, ContentsFirst):
            settings["contents_first"] = True
        elif isinstance(option, FollowLinks):
            settings["follow_links"] = True
        elif isinstance(option, MaxDepth):
            settings["max_depth"] = option.depth
        elif isinstance(option, MaxOpen):
            settings["max_open"] = option.count
        elif isinstance(option, MinDepth):
            settings["min_depth"] = option.depth
        elif isinstance(option, SameFileSystem):
            settings["same_file_system"] = True
        elif isinstance(option, SortBy):
            settings["sort_key"] = functools.cmp_to_key(option.comparator)
        elif isinstance(option, SortByFileName):
            settings["sort_key"] = _file_name
        elif isinstance(option, SortByKey):
            settings["sort_key"] = option.key
    return TraversalPolicy(**settings)
