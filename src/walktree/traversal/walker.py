"""Default traversal provider walking the local filesystem with os.scandir."""

import logging
import os
import stat
from collections import deque
from pathlib import Path
from typing import Deque, Iterator, List, Optional

from walktree.exceptions import TraversalError
from walktree.options import TraversalPolicy
from walktree.traversal.entry import Entry
from walktree.traversal.file_identifier import FileIdentifier
from walktree.traversal.provider import ErrorHandler, KeepPredicate, TraversalProvider
from walktree.types import FileType

logger = logging.getLogger(__name__)


class _Frame:
    """A directory on the descent stack together with its unvisited children."""

    __slots__ = ("entry", "identifier", "children", "handle", "visible")

    def __init__(
        self,
        entry: Entry,
        identifier: Optional[FileIdentifier],
        children: Iterator[Entry],
        handle: Optional["os._ScandirIterator[str]"],
        visible: bool,
    ) -> None:
        self.entry = entry
        self.identifier = identifier
        self.children = children
        self.handle = handle
        self.visible = visible


class FileSystemWalker(TraversalProvider):
    """Depth-first walk of a directory tree.

    The walk uses an explicit stack rather than recursion, so arbitrarily deep trees do
    not hit the interpreter's recursion limit. Directories are listed with os.scandir.
    Unsorted listings are consumed lazily straight from the scandir handle; once more
    than ``policy.max_open`` handles would be open, the oldest listing is read into
    memory and its handle closed. Sorted listings are always read completely before
    their first child is visited.

    Symbolic Link Behavior:
        The root is always followed. Below it, links are reported as SYMLINK entries and
        left alone unless ``policy.follow_links`` is set, in which case a link to a
        directory is descended like any directory. A followed link that resolves to one
        of the directories currently being descended is reported as a TraversalError
        and not yielded.

    Example:
        >>> from walktree.options import compile_policy, SortByFileName
        >>> walker = FileSystemWalker()
        >>> policy = compile_policy([SortByFileName()])
        >>> for entry in walker.walk(Path("src"), policy):  # doctest: +SKIP
        ...     print(entry.depth, entry.path)
        0 src
        1 src/main.py
        1 src/utils
        2 src/utils/helpers.py
    """

    def walk(
        self,
        root_path: Path,
        policy: TraversalPolicy,
        keep: Optional[KeepPredicate] = None,
        on_error: Optional[ErrorHandler] = None,
    ) -> Iterator[Entry]:
        root_path = Path(root_path)
        root = self._root_entry(root_path, on_error)
        if root is None:
            return

        logger.debug("Walking %s with %r", root_path, policy)
        root_device = root.stat().st_dev
        stack: List[_Frame] = []
        open_frames: Deque[_Frame] = deque()

        try:
            yield from self._admit(root, stack, open_frames, policy, keep, on_error, root_device)
            while stack:
                frame = stack[-1]
                child = next(frame.children, None)
                if child is None:
                    stack.pop()
                    self._close(frame, open_frames)
                    if policy.contents_first and frame.visible:
                        yield frame.entry
                    continue
                yield from self._admit(child, stack, open_frames, policy, keep, on_error, root_device)
        finally:
            for frame in open_frames:
                if frame.handle is not None:
                    frame.handle.close()

    def _root_entry(self, root_path: Path, on_error: Optional[ErrorHandler]) -> Optional[Entry]:
        try:
            is_link = os.path.islink(root_path)
            stat_result = os.stat(root_path)
        except OSError as e:
            self.report(TraversalError(root_path, e), on_error)
            return None

        file_type = FileType.DIRECTORY if stat.S_ISDIR(stat_result.st_mode) else FileType.FILE
        return Entry(
            root_path,
            depth=0,
            file_type=file_type,
            is_symlink=is_link,
            symlink_target=self._read_link(root_path) if is_link else None,
            stat_result=stat_result,
        )

    def _admit(
        self,
        entry: Entry,
        stack: List[_Frame],
        open_frames: Deque[_Frame],
        policy: TraversalPolicy,
        keep: Optional[KeepPredicate],
        on_error: Optional[ErrorHandler],
        root_device: int,
    ) -> Iterator[Entry]:
        """Decide whether an entry is yielded and whether it is descended."""
        identifier = None
        descend = entry.is_dir
        if entry.is_dir and (policy.follow_links or policy.same_file_system):
            try:
                identifier = FileIdentifier.from_stat(entry.stat())
            except OSError as e:
                self.report(TraversalError(entry.path, e), on_error)
                return

            if policy.follow_links and entry.is_symlink:
                for ancestor in stack:
                    if ancestor.identifier == identifier:
                        message = f"symbolic link loop back to {ancestor.entry.path}"
                        self.report(TraversalError(entry.path, message=message), on_error)
                        return

            if policy.same_file_system and stack and identifier.device_id != root_device:
                logger.debug("Not crossing into another file system at %s", entry.path)
                descend = False

        if keep is not None and not keep(entry):
            logger.debug("Pruned %s", entry.path)
            return

        visible = entry.depth >= policy.min_depth
        if descend and (policy.max_depth is None or entry.depth < policy.max_depth):
            frame = self._open(entry, identifier, policy, on_error, open_frames, visible)
            if frame is not None:
                if visible and not policy.contents_first:
                    yield entry
                stack.append(frame)
                return

        if visible:
            yield entry

    def _open(
        self,
        entry: Entry,
        identifier: Optional[FileIdentifier],
        policy: TraversalPolicy,
        on_error: Optional[ErrorHandler],
        open_frames: Deque[_Frame],
        visible: bool,
    ) -> Optional[_Frame]:
        try:
            handle = os.scandir(entry.path)
        except OSError as e:
            # The directory itself is still yielded, only its contents are missing
            self.report(TraversalError(entry.path, e), on_error)
            return None

        children = self._read_children(entry, handle, policy, on_error)
        if policy.sort_key is not None:
            with handle:
                listing = list(children)
            listing.sort(key=policy.sort_key)
            return _Frame(entry, identifier, iter(listing), None, visible)

        frame = _Frame(entry, identifier, children, handle, visible)
        open_frames.append(frame)
        if len(open_frames) > policy.max_open:
            oldest = open_frames.popleft()
            try:
                oldest.children = iter(list(oldest.children))
            finally:
                if oldest.handle is not None:
                    oldest.handle.close()
                    oldest.handle = None
        return frame

    def _close(self, frame: _Frame, open_frames: Deque[_Frame]) -> None:
        if frame.handle is not None:
            frame.handle.close()
            frame.handle = None
            open_frames.remove(frame)

    def _read_children(
        self,
        parent: Entry,
        handle: "os._ScandirIterator[str]",
        policy: TraversalPolicy,
        on_error: Optional[ErrorHandler],
    ) -> Iterator[Entry]:
        depth = parent.depth + 1
        try:
            for dir_entry in handle:
                entry = self._make_entry(dir_entry, depth, policy, on_error)
                if entry is not None:
                    yield entry
        except OSError as e:
            self.report(TraversalError(parent.path, e), on_error)

    def _make_entry(
        self,
        dir_entry: "os.DirEntry[str]",
        depth: int,
        policy: TraversalPolicy,
        on_error: Optional[ErrorHandler],
    ) -> Optional[Entry]:
        path = Path(dir_entry.path)
        stat_result = None
        try:
            is_link = dir_entry.is_symlink()
            if is_link and policy.follow_links:
                stat_result = dir_entry.stat(follow_symlinks=True)
                file_type = FileType.DIRECTORY if stat.S_ISDIR(stat_result.st_mode) else FileType.FILE
            elif is_link:
                file_type = FileType.SYMLINK
            else:
                file_type = FileType.DIRECTORY if dir_entry.is_dir(follow_symlinks=False) else FileType.FILE
        except OSError as e:
            self.report(TraversalError(path, e), on_error)
            return None

        return Entry(
            path,
            depth=depth,
            file_type=file_type,
            is_symlink=is_link,
            symlink_target=self._read_link(path) if is_link else None,
            stat_result=stat_result,
        )

    @staticmethod
    def _read_link(path: Path) -> Optional[str]:
        try:
            return os.readlink(path)
        except OSError:
            # Link target is informational only; the entry itself is still valid
            return None
