"""Plain ASCII tree output strategy."""

from repotree.tree.renderer import render

from .base_strategy import OutputStrategy, TreeReport


class TextOutputStrategy(OutputStrategy):
    """Output strategy producing the bare ASCII tree.

    The root itself is not printed, only its descendants, so an empty tree
    produces an empty document.

    Example:
        >>> from repotree.path_entry import PathEntry
        >>> from repotree.stats import summarize
        >>> from repotree.tree.builder import build_tree
        >>> from repotree.types import EntryKind
        >>> tree = build_tree([PathEntry.from_path("docs/index.md", EntryKind.FILE, size=10)])
        >>> print(TextOutputStrategy().format(TreeReport("demo", tree, summarize(tree))), end="")
        └── docs
            └── index.md
    """

    def format(self, report: TreeReport) -> str:
        return render(report.tree)

    def get_file_extension(self) -> str:
        return ".txt"
