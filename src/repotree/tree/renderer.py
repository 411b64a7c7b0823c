"""ASCII-art and record renderings of a built tree."""

from typing import Any, Dict, Iterator, Optional

from repotree.tree.tree_node import TreeNode
from repotree.types import EntryKind

BRANCH = "├── "
CORNER = "└── "
PIPE = "│   "
SPACE = "    "


def stream_tree_representation(node: TreeNode, prefix: str = "") -> Iterator[str]:
    """Generate the ASCII tree one line at a time.

    Generates output similar to the Unix 'tree' command. The node passed in is not
    printed, only its descendants, each line ending with a newline. Children are
    emitted in their stored order, so a tree produced by build_tree() always
    renders the same way.

    Args:
        node: Directory node whose descendants are rendered.
        prefix: Indentation inherited from the enclosing levels.

    Yields:
        Lines of the tree representation, including the connecting lines.

    Example:
        >>> root = TreeNode(".", kind=EntryKind.DIRECTORY)
        >>> src = TreeNode("src", parent=root, kind=EntryKind.DIRECTORY)
        >>> _ = TreeNode("main.py", parent=src)
        >>> _ = TreeNode("README.md", parent=root)
        >>> for line in stream_tree_representation(root):
        ...     print(line, end="")
        ├── src
        │   └── main.py
        └── README.md
    """
    children = node.children
    for i, child in enumerate(children):
        is_last = i == len(children) - 1
        yield f"{prefix}{CORNER if is_last else BRANCH}{child.name}\n"
        if child.is_dir:
            yield from stream_tree_representation(child, prefix + (SPACE if is_last else PIPE))


def render(node: TreeNode) -> str:
    """Get the complete ASCII tree below node as a single string."""
    return "".join(stream_tree_representation(node))


def to_record(node: TreeNode) -> Dict[str, Any]:
    """Serialize a node and its descendants as plain nested dictionaries.

    Files carry their ``size``; directories carry their ``children`` (possibly
    empty). The result can be passed to json.dumps() directly as long as the
    metadata values are JSON-serializable, which holds for both collectors.

    Example:
        >>> root = TreeNode(".", kind=EntryKind.DIRECTORY)
        >>> _ = TreeNode("a.txt", parent=root, file_size=3, metadata={"sha": "abc"})
        >>> to_record(root)
        {'name': '.', 'type': 'directory', 'metadata': {}, 'children': [{'name': 'a.txt', 'type': 'file', 'metadata': {'sha': 'abc'}, 'size': 3}]}
    """
    record: Dict[str, Any] = {"name": node.name, "type": node.kind.value, "metadata": dict(node.metadata)}
    if node.is_dir:
        record["children"] = [to_record(child) for child in node.children]
    else:
        record["size"] = node.file_size
    return record


def from_record(record: Dict[str, Any], parent: Optional[TreeNode] = None) -> TreeNode:
    """Rebuild a tree from the output of to_record().

    Children are attached in the order they appear in the record, so the ordering
    that was baked in when the record was produced is preserved.

    Raises:
        ValueError: If the record's type is neither "file" nor "directory".
        KeyError: If the record has no name.
    """
    try:
        kind = EntryKind(record.get("type", EntryKind.DIRECTORY.value))
    except ValueError:
        raise ValueError(f"Unknown node type in record: {record.get('type')!r}")

    node = TreeNode(
        record["name"],
        parent=parent,
        kind=kind,
        file_size=record.get("size") if kind is EntryKind.FILE else None,
        metadata=record.get("metadata"),
    )
    if kind is EntryKind.DIRECTORY:
        for child in record.get("children") or []:
            from_record(child, parent=node)
    return node
