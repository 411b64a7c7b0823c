"""Folding of flat path entries into a sorted TreeNode hierarchy.

The builder owns every node it creates until build_tree() returns. Nothing is
shared between calls, so concurrent builds never see each other's state.
"""

from typing import Dict, Iterable, Optional, Tuple

from repotree.exclusion_rules.base_rules import BaseExclusionRules
from repotree.path_entry import PathEntry
from repotree.tree.tree_node import TreeNode
from repotree.types import EntryKind


def build_tree(
    entries: Iterable[PathEntry],
    exclusion_rules: Optional[BaseExclusionRules] = None,
    root_name: str = ".",
    max_depth: Optional[int] = None,
) -> TreeNode:
    """Build a sorted tree from a flat sequence of path entries.

    Entries may arrive in any order. Directories implied by deeper paths are
    created on first reference with empty metadata, and an explicit Directory
    entry for such a directory fills its metadata in later. The result is the
    same for every permutation of a consistent input.

    When two entries disagree about the kind of the same path (a file and a
    directory with the same name, or a path that descends through a file), the
    first definition wins and the conflicting entry is dropped together with
    anything it would have created beneath itself.

    Args:
        entries: Entries produced by a collector.
        exclusion_rules: Rules checked against each entry's full path and every
            directory above it. Entries below an excluded directory are skipped
            even when a negation pattern re-includes them.
        root_name: Name given to the synthetic root directory.
        max_depth: If given, entries with more path segments than this are skipped.

    Returns:
        The synthetic root directory node, with children sorted recursively.

    Example:
        >>> from repotree.tree.renderer import render
        >>> entries = [
        ...     PathEntry.from_path("a/b.txt", EntryKind.FILE, size=10),
        ...     PathEntry.from_path("a", EntryKind.DIRECTORY),
        ...     PathEntry.from_path("c.txt", EntryKind.FILE, size=5),
        ... ]
        >>> print(render(build_tree(entries)), end="")
        ├── a
        │   └── b.txt
        └── c.txt
    """
    root = TreeNode(root_name, kind=EntryKind.DIRECTORY)
    nodes: Dict[Tuple[str, ...], TreeNode] = {(): root}
    checked_dirs: Dict[Tuple[str, ...], bool] = {}

    for entry in entries:
        if not entry.path:
            continue
        if max_depth is not None and len(entry.path) > max_depth:
            continue
        if exclusion_rules is not None and exclusion_rules.exclude_with_parents(
            entry.path, entry.size, entry.is_dir, checked_dirs
        ):
            continue
        _fold_entry(entry, nodes)

    return sort_tree(root)


def _fold_entry(entry: PathEntry, nodes: Dict[Tuple[str, ...], TreeNode]) -> None:
    parent = nodes[()]
    for depth in range(1, len(entry.path)):
        key = entry.path[:depth]
        node = nodes.get(key)
        if node is None:
            node = TreeNode(entry.path[depth - 1], parent=parent, kind=EntryKind.DIRECTORY)
            nodes[key] = node
        elif not node.is_dir:
            # Path descends through a file: conflicting redefinition, keep the file
            return
        parent = node

    existing = nodes.get(entry.path)
    if existing is None:
        nodes[entry.path] = TreeNode(
            entry.name,
            parent=parent,
            kind=entry.kind,
            file_size=entry.size if entry.kind is EntryKind.FILE else None,
            metadata=entry.metadata,
        )
    elif existing.is_dir and entry.is_dir and not existing.metadata:
        existing.metadata = dict(entry.metadata)


def sort_tree(node: TreeNode) -> TreeNode:
    """Sort the children of every directory in place and return the node.

    Directories come before files; within each kind names ascend in codepoint
    order (case-sensitive, so ``"B"`` sorts before ``"a"``).
    """
    if node.children:
        node.children = sorted(node.children, key=TreeNode.sort_key)
        for child in node.children:
            sort_tree(child)
    return node
