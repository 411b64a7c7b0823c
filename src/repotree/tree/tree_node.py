"""Node representation for files and directories in the tree."""

from typing import Any, Dict, Optional

from anytree import Node

from repotree.types import EntryKind


class TreeNode(Node):  # type: ignore
    """Node class representing a file or directory in the tree.

    Extends anytree.Node with the entry kind, size and metadata carried over from
    the collected PathEntry. Inherits tree traversal (children, depth, path,
    iteration helpers) from anytree.Node.

    Attributes:
        name (str): The final path segment.
        parent (Optional[TreeNode]): The parent node in the tree.
        kind (EntryKind): FILE or DIRECTORY.
        file_size (Optional[int]): Size in bytes for files, None for directories.
        metadata (Dict[str, Any]): Metadata from the originating entry, or an empty
            mapping for directories that were only implied by deeper paths.
        children (tuple[TreeNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = TreeNode(".", kind=EntryKind.DIRECTORY)
        >>> child = TreeNode("app.py", parent=root, file_size=42)
        >>> child.is_dir
        False
        >>> [node.name for node in root.children]
        ['app.py']
    """

    def __init__(
        self,
        name: str,
        parent: Optional["TreeNode"] = None,
        kind: EntryKind = EntryKind.FILE,
        file_size: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.kind = kind
        self.file_size = file_size
        self.metadata: Dict[str, Any] = dict(metadata or {})

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def sort_key(self) -> tuple:
        """Key placing directories before files, then names in codepoint order."""
        return (not self.is_dir, self.name)
