"""Collector listing a directory on the local filesystem."""

import os
import stat
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

from repotree.collectors.base_collector import PathCollector, WarningHandler
from repotree.collectors.permission_action import PermissionAction
from repotree.exclusion_rules.base_rules import BaseExclusionRules
from repotree.path_entry import PathEntry
from repotree.types import EntryKind, PathType

FileIdentifier = Tuple[int, int]


def _timestamp(seconds: float) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).isoformat()


def stat_metadata(stat_info: os.stat_result) -> Dict[str, Any]:
    """Extract the metadata recorded for local entries from a stat result.

    Returns:
        ``modified`` and ``created`` as ISO-8601 UTC timestamps and
        ``permissions`` as a four-digit octal string. Platforms without a birth
        time report the inode change time as ``created``.
    """
    created = getattr(stat_info, "st_birthtime", stat_info.st_ctime)
    return {
        "modified": _timestamp(stat_info.st_mtime),
        "created": _timestamp(created),
        "permissions": f"{stat.S_IMODE(stat_info.st_mode):04o}",
    }


class LocalCollector(PathCollector):
    """Collector that walks a local directory recursively.

    Exclusion rules are applied while listing: an excluded directory is never
    opened, so nothing beneath it is reported. Paths handed to the rules are
    relative to the root and joined with forward slashes on every platform.

    Symbolic Link Behavior:
        By default symbolic links are not followed. A link is reported as a file
        entry whose metadata carries ``symlink_target``. With follow_symlinks the
        link is reported as whatever it points to and linked directories are
        walked; a link leading back into a directory that is already being walked
        is reported as a file and a warning is issued instead of looping forever.

    Permission Handling:
        A subdirectory that cannot be read is still reported, but its contents are
        lost. Depending on permission_action the walk continues silently (IGNORE),
        continues after reporting a warning (WARN) or raises (RAISE). A root that
        cannot be read always raises.

    Attributes:
        permission_action (PermissionAction): How to handle unreadable subdirectories.
        follow_symlinks (bool): Whether to follow symbolic links.
        max_depth (Optional[int]): Maximum number of path segments to descend to.

    Example:
        >>> collector = LocalCollector()  # doctest: +SKIP
        >>> for entry in collector.collect("src"):  # doctest: +SKIP
        ...     print(entry.path_string, entry.kind.value)
        main.py file
        utils directory
        utils/helpers.py file
    """

    def __init__(
        self,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        permission_action: PermissionAction = PermissionAction.WARN,
        follow_symlinks: bool = False,
        max_depth: Optional[int] = None,
        on_warning: Optional[WarningHandler] = None,
    ) -> None:
        """Initialize a LocalCollector.

        Args:
            exclusion_rules: Rules for excluding files and directories. Defaults to None.
            permission_action: How to handle permission errors below the root.
                Defaults to WARN.
            follow_symlinks: Whether to follow symbolic links. Defaults to False.
            max_depth: Stop descending once paths have this many segments.
                Defaults to None (unlimited).
            on_warning: Callable receiving warning messages. Defaults to printing
                them on stderr.

        Raises:
            ValueError: If max_depth is negative.
        """
        super().__init__(exclusion_rules, on_warning)
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth cannot be negative: {max_depth}")
        self.permission_action = PermissionAction(permission_action)
        self.follow_symlinks = follow_symlinks
        self.max_depth = max_depth

    def collect(self, source: PathType) -> List[PathEntry]:
        """List every file and directory below source.

        Args:
            source: Root directory to list. Can be any path-like object.

        Returns:
            Entries in traversal order, paths relative to source.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If the root can't be read, or a subdirectory can't be
                read and permission_action is RAISE.
        """
        root = Path(source)
        if not root.exists():
            raise FileNotFoundError(f"Root path does not exist: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {root}")

        names = sorted(os.listdir(root))
        root_stat = root.stat()
        visited: Set[FileIdentifier] = {(root_stat.st_dev, root_stat.st_ino)}

        entries: List[PathEntry] = []
        self._walk(root, (), names, visited, entries)
        return entries

    def _walk(
        self,
        directory: Path,
        relative: Tuple[str, ...],
        names: List[str],
        visited: Set[FileIdentifier],
        entries: List[PathEntry],
    ) -> None:
        for name in names:
            path = directory / name
            child_relative = relative + (name,)
            child_path_str = "/".join(child_relative)

            try:
                is_symlink = path.is_symlink()
                stat_info = self._stat(path, is_symlink)
            except OSError as e:
                self._handle_access_error(path, e)
                continue

            is_dir = stat.S_ISDIR(stat_info.st_mode)
            size = None if is_dir else stat_info.st_size

            if self._is_excluded(child_path_str, size, is_dir):
                continue

            metadata = stat_metadata(stat_info)
            if is_symlink and not self.follow_symlinks:
                try:
                    metadata["symlink_target"] = os.readlink(path)
                except OSError:
                    pass

            file_id = (stat_info.st_dev, stat_info.st_ino)
            if is_dir and file_id in visited:
                self.on_warning(f"Symlink loop detected at {path}")
                metadata["symlink_target"] = "[loop detected]"
                entries.append(PathEntry(child_relative, EntryKind.FILE, 0, metadata))
                continue

            kind = EntryKind.DIRECTORY if is_dir else EntryKind.FILE
            entries.append(PathEntry(child_relative, kind, size, metadata))

            if not is_dir or (self.max_depth is not None and len(child_relative) >= self.max_depth):
                continue

            try:
                child_names = sorted(os.listdir(path))
            except OSError as e:
                self._handle_access_error(path, e)
                continue

            # Only the current branch is tracked, so a directory reachable through
            # two unrelated links is still listed twice
            visited.add(file_id)
            self._walk(path, child_relative, child_names, visited, entries)
            visited.discard(file_id)

    def _stat(self, path: Path, is_symlink: bool) -> os.stat_result:
        if is_symlink and not self.follow_symlinks:
            return path.lstat()
        try:
            return path.stat()
        except FileNotFoundError:
            if is_symlink:
                # Dangling link: report the link itself
                return path.lstat()
            raise

    def _handle_access_error(self, path: Path, error: OSError) -> None:
        if self.permission_action is PermissionAction.RAISE:
            if isinstance(error, PermissionError):
                raise PermissionError(f"Access denied to {path}: {error}")
            raise error
        if self.permission_action is PermissionAction.WARN:
            self.on_warning(f"Could not read {path}: {error}")
