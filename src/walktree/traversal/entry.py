"""Raw entry produced by a traversal provider."""

import os
from pathlib import Path
from typing import Optional

from walktree.types import FileType, PathType


class Entry:
    """A single filesystem entry as seen by the filter and the mapper.

    Entries are handed to user callbacks exactly once, in traversal order. The file type
    reflects the traversal policy: when links are followed a symlink to a directory is
    reported as a DIRECTORY, otherwise it is reported as a SYMLINK and never descended.

    Attributes:
        path (Path): Path of the entry, the walk root joined with the names below it.
        depth (int): Distance from the walk root, which has depth 0.
        file_type (FileType): Classification of the entry.
        is_symlink (bool): Whether the path itself is a symbolic link, followed or not.
        symlink_target (Optional[str]): Raw link target when is_symlink is True.

    Example:
        >>> entry = Entry("/r/a", depth=1, file_type=FileType.DIRECTORY)
        >>> entry.name, entry.is_dir
        ('a', True)
    """

    __slots__ = ("path", "depth", "file_type", "is_symlink", "symlink_target", "_stat")

    def __init__(
        self,
        path: PathType,
        depth: int = 0,
        file_type: FileType = FileType.FILE,
        is_symlink: bool = False,
        symlink_target: Optional[str] = None,
        stat_result: Optional[os.stat_result] = None,
    ) -> None:
        """Initialize an Entry.

        Args:
            path: Path of the entry.
            depth: Depth below the walk root. Defaults to 0.
            file_type: Classification of the entry. Defaults to FILE.
            is_symlink: Whether the path is a symbolic link. Defaults to False.
            symlink_target: Target of the link, if known.
            stat_result: A stat result already obtained by the provider, reused by stat().
        """
        self.path = Path(path)
        self.depth = depth
        self.file_type = file_type
        self.is_symlink = is_symlink
        self.symlink_target = symlink_target
        self._stat = stat_result

    @property
    def name(self) -> str:
        """The final path component (the root keeps its own name)."""
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.file_type is FileType.FILE

    def stat(self) -> os.stat_result:
        """Return stat information for the entry.

        The result obtained during traversal is reused when available; otherwise the path
        is stat'ed, following the link only when the entry is reported as a directory.

        Raises:
            OSError: If the entry can no longer be stat'ed.
        """
        if self._stat is None:
            self._stat = os.stat(self.path, follow_symlinks=not self.is_symlink or self.is_dir)
        return self._stat

    def __repr__(self) -> str:
        return f"Entry(path={str(self.path)!r}, depth={self.depth}, file_type={self.file_type.value})"
