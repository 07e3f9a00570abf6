from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class FileType(Enum):
    """Enumeration of file types reported for traversal entries.

    Attributes:
        FILE: Regular file (or anything that is neither a directory nor a symlink)
        DIRECTORY: Directory, including a followed symlink to a directory
        SYMLINK: Symbolic link that is not being followed
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
