"""Builder collecting the configuration of a walk and running it."""

import logging
from pathlib import Path
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar, Union

from walktree.error_action import ErrorAction
from walktree.exceptions import ConfigurationError
from walktree.options import TraversalOption, check_compatibility, compile_policy
from walktree.pipeline import EntryPipeline
from walktree.traversal.entry import Entry
from walktree.traversal.provider import TraversalProvider
from walktree.traversal.walker import FileSystemWalker
from walktree.tree.assembler import TreeAssembler
from walktree.tree.walk_tree import WalkTree
from walktree.types import PathType

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WalkTreeBuilder(Generic[T]):
    """Configuration session for a single walk.

    A builder is anchored at a root path and accumulates a filter, a mapper, traversal
    options, an error action and optionally a custom traversal provider. Nothing touches
    the filesystem until walk() is called. walk() consumes the builder: afterwards every
    method raises ConfigurationError.

    Every ``with_*`` method returns the builder itself so calls can be chained.

    Attributes:
        root_path (Path): Where the walk starts.

    Example:
        >>> from walktree.options import MaxDepth, SortByFileName
        >>> tree = (
        ...     WalkTreeBuilder.load("src")
        ...     .with_filter(lambda entry: entry.name != "__pycache__")
        ...     .with_map(lambda entry: entry.file_type)
        ...     .with_traversal_option(SortByFileName())
        ...     .with_traversal_option(MaxDepth(2))
        ...     .walk()
        ... )  # doctest: +SKIP
        >>> tree.data_by_path("src/walktree")  # doctest: +SKIP
        <FileType.DIRECTORY: 'directory'>
    """

    def __init__(self, root_path: PathType) -> None:
        self.root_path = Path(root_path)
        self._filter: Optional[Callable[[Entry], bool]] = None
        self._mapper: Optional[Callable[[Entry], T]] = None
        self._options: List[TraversalOption] = []
        self._error_action: Union[ErrorAction, str] = ErrorAction.COLLECT
        self._provider: Optional[TraversalProvider] = None
        self._consumed = False

    @classmethod
    def load(cls, root_path: PathType) -> "WalkTreeBuilder[Any]":
        """Begin a configuration session anchored at ``root_path``."""
        return cls(root_path)

    def with_filter(self, predicate: Callable[[Entry], bool]) -> "WalkTreeBuilder[T]":
        """Keep only entries for which ``predicate`` returns True.

        A rejected directory is not descended, so nothing below it reaches the tree. A
        rejected file removes just that entry. Replaces any previously supplied filter.
        """
        self._check_open()
        self._filter = predicate
        return self

    def with_map(self, transform: Callable[[Entry], T]) -> "WalkTreeBuilder[T]":
        """Produce the data stored in each node from its entry. Required before walk()."""
        self._check_open()
        self._mapper = transform
        return self

    def with_traversal_option(self, option: TraversalOption) -> "WalkTreeBuilder[T]":
        """Append a traversal option. Options accumulate in the order supplied."""
        self._check_open()
        self._options.append(option)
        return self

    def with_error_action(self, action: Union[ErrorAction, str]) -> "WalkTreeBuilder[T]":
        """Choose how traversal errors are handled. Defaults to ErrorAction.COLLECT."""
        self._check_open()
        self._error_action = action
        return self

    def with_provider(self, provider: TraversalProvider) -> "WalkTreeBuilder[T]":
        """Use ``provider`` instead of walking the local filesystem."""
        self._check_open()
        self._provider = provider
        return self

    @property
    def options(self) -> Tuple[TraversalOption, ...]:
        """The traversal options supplied so far, in the order they were added."""
        return tuple(self._options)

    def walk(self) -> WalkTree[T]:
        """Validate the configuration, run the walk and assemble the tree.

        Returns:
            The finished tree.

        Raises:
            ConfigurationError: If the configuration is invalid or the builder was
                already consumed. Raised before the provider is called.
            TraversalError: On the first traversal error when the error action is RAISE.
            DuplicatePathError: If the provider produced the same path twice.
        """
        self._check_open()
        self._consumed = True

        error_action = self._validate()
        policy = compile_policy(self._options)
        provider = self._provider if self._provider is not None else FileSystemWalker()
        pipeline: EntryPipeline[T] = EntryPipeline(self._mapper, self._filter, error_action)  # type: ignore[arg-type]

        logger.debug("Walking %s using %s", self.root_path, type(provider).__name__)
        pairs, errors = pipeline.run(provider, self.root_path, policy)
        return TreeAssembler().assemble(pairs, errors)

    def _validate(self) -> ErrorAction:
        if self._mapper is None:
            raise ConfigurationError("a mapper must be supplied with with_map() before walk()")
        if not callable(self._mapper):
            raise ConfigurationError(f"mapper must be callable, got {self._mapper!r}")
        if self._filter is not None and not callable(self._filter):
            raise ConfigurationError(f"filter must be callable, got {self._filter!r}")
        if self._provider is not None and not isinstance(self._provider, TraversalProvider):
            raise ConfigurationError(f"provider must implement TraversalProvider, got {type(self._provider)}")
        check_compatibility(self._options)
        try:
            return ErrorAction(self._error_action)
        except ValueError:
            raise ConfigurationError(f"unknown error action: {self._error_action!r}") from None

    def _check_open(self) -> None:
        if self._consumed:
            raise ConfigurationError("this builder has already been consumed by walk()")
