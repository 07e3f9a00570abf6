"""Entry filter using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec

from walktree.traversal.entry import Entry
from walktree.types import PathType

from .base_filter import BaseEntryFilter


class GitIgnoreFilter(BaseEntryFilter):
    """Entry filter driven by .gitignore patterns.

    Paths are matched relative to the walk root, with forward slashes, using the pathspec
    library's gitwildmatch implementation. All standard .gitignore syntax is supported:
    globs, directory patterns ending in ``/``, negation with ``!``, ``**`` and comments.
    Patterns from several files, and patterns added one at a time, are combined in the
    order they were supplied, so later negations can re-include earlier matches.

    Directories are also tested with a trailing slash, so a pattern such as ``build/``
    excludes the ``build`` directory itself and therefore prunes everything beneath it.
    The walk root is never excluded.

    Attributes:
        root_path (Path): The walk root that patterns are relative to.
        spec (PathSpec): Compiled pattern matcher.

    Example:
        >>> git_filter = GitIgnoreFilter("/r")
        >>> git_filter.add_rule("*.pyc")
        >>> git_filter.add_rule("build/")
        >>> git_filter(Entry("/r/main.pyc", depth=1))
        False
        >>> from walktree.types import FileType
        >>> git_filter(Entry("/r/build", depth=1, file_type=FileType.DIRECTORY))
        False
        >>> git_filter(Entry("/r/main.py", depth=1))
        True
    """

    def __init__(self, root_path: PathType, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize the filter, optionally loading patterns from files.

        Args:
            root_path: The root of the walk the filter will be used with.
            rules_files: Path(s) to .gitignore-style file(s) to load.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self.root_path = Path(root_path)
        self._lines: List[str] = []
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, entry: Entry) -> bool:
        relative = self._relative(entry.path)
        if not relative:
            return False
        if self.spec.match_file(relative):
            return True
        return entry.is_dir and self.spec.match_file(relative + "/")

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns found in one or more files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            with open(path, "r") as f:
                self._lines.extend(f.read().splitlines())

        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

    def add_rule(self, rule: str) -> None:
        """Append a single pattern, written as it would appear in a .gitignore line."""
        self._lines.append(rule)
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

    def has_rules(self) -> bool:
        return bool(self.spec.patterns)

    def _relative(self, path: Path) -> str:
        try:
            relative = path.relative_to(self.root_path)
        except ValueError:
            # Not below the root, match on the path as given
            return path.as_posix().lstrip("/")
        return "" if relative == Path(".") else relative.as_posix()
