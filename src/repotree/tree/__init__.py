"""Tree representation of collected paths.

This package folds flat path entries into a hierarchy of TreeNode objects and
renders that hierarchy as ASCII art or as plain nested records.
"""

from .builder import build_tree, sort_tree
from .renderer import from_record, render, stream_tree_representation, to_record
from .tree_node import TreeNode

__all__ = [
    "TreeNode",
    "build_tree",
    "from_record",
    "render",
    "sort_tree",
    "stream_tree_representation",
    "to_record",
]
