"""Device and inode identity of a directory, used for loop and device checks."""

import os
from typing import Any


class FileIdentifier:
    """Identity of a filesystem object by device and inode.

    The walker keeps the identifiers of the directories on the current descent path so
    that a followed symbolic link pointing back at one of them is recognised as a loop,
    and compares device ids against the root when crossing file systems is disallowed.

    Attributes:
        device_id (int): The st_dev value.
        inode_number (int): The st_ino value.

    Note:
        On Windows st_ino is filled in by os.stat on recent Python versions, which is
        enough for loop detection.
    """

    __slots__ = ("device_id", "inode_number")

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        """Build an identifier from an os.stat_result."""
        return cls(stat_result.st_dev, stat_result.st_ino)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return self.device_id == other.device_id and self.inode_number == other.inode_number

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
