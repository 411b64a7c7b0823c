"""Summary statistics computed over a built tree."""

import math
import os
from dataclasses import dataclass, field
from typing import Any, Dict

from anytree import PreOrderIter
from humanfriendly import round_number

from repotree.tree.tree_node import TreeNode

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")
NO_EXTENSION = "no extension"


def format_size(num_bytes: int) -> str:
    """Format a byte count using base-1024 units.

    The largest unit whose scaled value is at least 1 is chosen, capped at TB.
    Values are rounded to two decimals with trailing zeros removed.

    Args:
        num_bytes: Non-negative number of bytes.

    Returns:
        A string such as ``"0 Bytes"``, ``"512 Bytes"`` or ``"1.5 KB"``.

    Raises:
        ValueError: If num_bytes is negative.

    Example:
        >>> format_size(0)
        '0 Bytes'
        >>> format_size(1536)
        '1.5 KB'
        >>> format_size(1048576)
        '1 MB'
    """
    if num_bytes < 0:
        raise ValueError(f"Size cannot be negative: {num_bytes}")
    if num_bytes == 0:
        return "0 Bytes"
    exponent = min(int(math.log(num_bytes, 1024)), len(SIZE_UNITS) - 1)
    # math.log can land just beside an exact power of 1024
    if exponent + 1 < len(SIZE_UNITS) and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    elif exponent > 0 and num_bytes < 1024**exponent:
        exponent -= 1
    return f"{round_number(num_bytes / 1024**exponent)} {SIZE_UNITS[exponent]}"


def file_extension(name: str) -> str:
    """Get the lowercased extension of a file name, including the leading dot.

    Names without an extension, including dotfiles such as ``.gitignore``, map to
    ``"no extension"``.

    Example:
        >>> file_extension("App.JSX")
        '.jsx'
        >>> file_extension("archive.tar.gz")
        '.gz'
        >>> file_extension(".gitignore")
        'no extension'
        >>> file_extension("Makefile")
        'no extension'
    """
    return os.path.splitext(name)[1].lower() or NO_EXTENSION


@dataclass
class StatsSummary:
    """Aggregate statistics of a tree.

    Attributes:
        total_files (int): Number of file nodes.
        total_directories (int): Number of directory nodes, excluding the root.
        total_size_bytes (int): Sum of all file sizes.
        file_types (Dict[str, int]): Count of files per lowercased extension.
        max_depth (int): Depth of the deepest node (children of the root have depth 1).
    """

    total_files: int = 0
    total_directories: int = 0
    total_size_bytes: int = 0
    file_types: Dict[str, int] = field(default_factory=dict)
    max_depth: int = 0

    @property
    def total_size(self) -> str:
        """Human-readable total size."""
        return format_size(self.total_size_bytes)

    def sorted_file_types(self) -> Dict[str, int]:
        """File types ordered by descending count, then by extension."""
        return dict(sorted(self.file_types.items(), key=lambda item: (-item[1], item[0])))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used in the JSON artifact."""
        return {
            "totalFiles": self.total_files,
            "totalDirectories": self.total_directories,
            "totalSize": self.total_size,
            "totalSizeBytes": self.total_size_bytes,
            "maxDepth": self.max_depth,
            "fileTypes": self.sorted_file_types(),
        }


def summarize(root: TreeNode) -> StatsSummary:
    """Compute statistics for everything below root in a single traversal.

    Example:
        >>> from repotree.path_entry import PathEntry
        >>> from repotree.tree.builder import build_tree
        >>> from repotree.types import EntryKind
        >>> tree = build_tree([
        ...     PathEntry.from_path("src/app.js", EntryKind.FILE, size=1024),
        ...     PathEntry.from_path("src/util.js", EntryKind.FILE, size=512),
        ...     PathEntry.from_path("README", EntryKind.FILE, size=0),
        ... ])
        >>> summary = summarize(tree)
        >>> summary.total_files, summary.total_directories, summary.total_size, summary.max_depth
        (3, 1, '1.5 KB', 2)
        >>> summary.file_types
        {'.js': 2, 'no extension': 1}
    """
    summary = StatsSummary()
    root_depth = root.depth

    for node in PreOrderIter(root):
        if node is root:
            continue
        summary.max_depth = max(summary.max_depth, node.depth - root_depth)
        if node.is_dir:
            summary.total_directories += 1
        else:
            summary.total_files += 1
            summary.total_size_bytes += node.file_size or 0
            extension = file_extension(node.name)
            summary.file_types[extension] = summary.file_types.get(extension, 0) + 1

    return summary
