"""Flat record describing one discovered file or directory."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from repotree.types import EntryKind

_SEPARATORS = re.compile(r"[\\/]+")


def split_path(path: str) -> Tuple[str, ...]:
    """Split a path string into its segments.

    Both forward slashes and backslashes are treated as separators, and empty
    segments (leading, trailing or doubled separators) are dropped.

    Args:
        path: Relative path such as ``"src/index.js"`` or ``"src\\index.js"``.

    Returns:
        The path segments in order.

    Example:
        >>> split_path("src/utils/helpers.py")
        ('src', 'utils', 'helpers.py')
        >>> split_path("docs\\\\guide.md")
        ('docs', 'guide.md')
    """
    return tuple(segment for segment in _SEPARATORS.split(path) if segment)


@dataclass(frozen=True)
class PathEntry:
    """One filesystem or repository object as reported by a collector.

    Entries are created once per discovered object and never modified. The tree
    builder folds them into TreeNode objects and discards them afterwards.

    Attributes:
        path (Tuple[str, ...]): Path segments relative to the collection root.
        kind (EntryKind): Whether the entry is a file or a directory.
        size (Optional[int]): Size in bytes. Only meaningful for files.
        metadata (Dict[str, Any]): Auxiliary fields (timestamps, permission bits,
            content hash). Opaque to the tree builder.

    Example:
        >>> entry = PathEntry.from_path("src/index.js", EntryKind.FILE, size=120)
        >>> entry.path
        ('src', 'index.js')
        >>> entry.name
        'index.js'
        >>> entry.path_string
        'src/index.js'
    """

    path: Tuple[str, ...]
    kind: EntryKind
    size: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_path(
        cls,
        path: str,
        kind: EntryKind,
        size: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "PathEntry":
        """Create an entry from a separator-delimited path string."""
        return cls(split_path(path), kind, size, dict(metadata or {}))

    @property
    def name(self) -> str:
        """The final path segment."""
        return self.path[-1] if self.path else ""

    @property
    def path_string(self) -> str:
        """The path joined with forward slashes, used for exclusion matching."""
        return "/".join(self.path)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY
