"""Tree mapping of a single local directory or remote repository.

This module ties the pieces together: a collector lists the source, the builder
folds the listing into a tree, and the tree is then rendered, summarized or
formatted by an output strategy.
"""

from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Sequence, Union

from repotree.collectors.base_collector import WarningHandler
from repotree.collectors.github_collector import DEFAULT_FALLBACK_REF, DEFAULT_REF, GitHubCollector
from repotree.collectors.local_collector import LocalCollector
from repotree.collectors.permission_action import PermissionAction
from repotree.exclusion_rules.base_rules import BaseExclusionRules
from repotree.output_strategies.base_strategy import OutputStrategy, TreeReport
from repotree.output_strategies.json_strategy import JSONOutputStrategy
from repotree.output_strategies.markdown_strategy import MarkdownOutputStrategy
from repotree.output_strategies.text_strategy import TextOutputStrategy
from repotree.path_entry import PathEntry
from repotree.stats import StatsSummary, summarize
from repotree.tree.builder import build_tree
from repotree.tree.renderer import render, stream_tree_representation, to_record
from repotree.tree.tree_node import TreeNode
from repotree.types import PathType

OUTPUT_FORMATS = ("text", "json", "markdown")


def create_strategy(output_format: str) -> OutputStrategy:
    """Get the output strategy for a format name.

    Raises:
        ValueError: If the format is not one of OUTPUT_FORMATS.
    """
    if output_format == "text":
        return TextOutputStrategy()
    if output_format == "json":
        return JSONOutputStrategy()
    if output_format == "markdown":
        return MarkdownOutputStrategy()
    raise ValueError(f"Unsupported output format: {output_format}")


class RepoTree:
    """A built tree together with what is needed to report on it.

    Instances are normally created through from_directory() or from_github(),
    which collect the entries, build the tree and compute the summary once. The
    tree is not modified afterwards, so every rendering of one instance is
    identical.

    Attributes:
        title (str): Name of the listed source (directory name or owner/repo).
        tree (TreeNode): Root of the built tree.
        summary (StatsSummary): Statistics over the tree.
        repository (Optional[Dict[str, Any]]): Repository information for remote sources.
        exclusion_rules (Optional[BaseExclusionRules]): Rules that were applied.

    Example:
        >>> mapped = RepoTree.from_directory("src")  # doctest: +SKIP
        >>> print(mapped.render(), end="")  # doctest: +SKIP
        ├── utils
        │   └── helpers.py
        └── main.py
        >>> mapped.summary.total_files  # doctest: +SKIP
        2
    """

    def __init__(
        self,
        title: str,
        entries: Sequence[PathEntry],
        *,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        max_depth: Optional[int] = None,
        repository: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Build the tree for already collected entries.

        Args:
            title: Name of the listed source; also used as the root's name.
            entries: Collected entries, in any order.
            exclusion_rules: Rules applied while building. Defaults to None.
            max_depth: Maximum number of path segments kept. Defaults to None.
            repository: Repository information for remote sources.
        """
        self.title = title
        self.exclusion_rules = exclusion_rules
        self.repository = repository
        self.tree: TreeNode = build_tree(entries, exclusion_rules, root_name=title, max_depth=max_depth)
        self.summary: StatsSummary = summarize(self.tree)

    @classmethod
    def from_directory(
        cls,
        directory: PathType,
        *,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        permission_action: Union[str, PermissionAction] = PermissionAction.WARN,
        follow_symlinks: bool = False,
        max_depth: Optional[int] = None,
        on_warning: Optional[WarningHandler] = None,
    ) -> "RepoTree":
        """Collect and build the tree of a local directory.

        Raises:
            ValueError: If permission_action is not a valid action.
            FileNotFoundError: If the directory doesn't exist.
            NotADirectoryError: If the path isn't a directory.
            PermissionError: If the directory can't be read, or a subdirectory can't
                be read and permission_action is "raise".
        """
        if isinstance(permission_action, str):
            try:
                permission_action = PermissionAction(permission_action.lower())
            except ValueError:
                raise ValueError(
                    f"Invalid permission_action: {permission_action}. " "Must be one of: 'ignore', 'warn', 'raise'"
                )

        collector = LocalCollector(
            exclusion_rules,
            permission_action=permission_action,
            follow_symlinks=follow_symlinks,
            max_depth=max_depth,
            on_warning=on_warning,
        )
        entries = collector.collect(directory)
        title = Path(directory).resolve().name or str(directory)
        return cls(title, entries, exclusion_rules=exclusion_rules, max_depth=max_depth)

    @classmethod
    def from_github(
        cls,
        repository_url: str,
        *,
        token: Optional[str] = None,
        ref: Optional[str] = DEFAULT_REF,
        fallback_ref: Optional[str] = DEFAULT_FALLBACK_REF,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        max_depth: Optional[int] = None,
        include_repository_info: bool = False,
        collector: Optional[GitHubCollector] = None,
        on_warning: Optional[WarningHandler] = None,
    ) -> "RepoTree":
        """Collect and build the tree of a GitHub repository.

        Args:
            repository_url: Repository URL or ``owner/repo``.
            token: API token passed to the collector.
            ref: Ref to list; None uses the repository's default branch.
            fallback_ref: Ref tried once if ref doesn't exist.
            exclusion_rules: Rules applied to every path.
            max_depth: Maximum number of path segments kept.
            include_repository_info: Also fetch the repository record (description,
                stars, ...) for the report. Costs one extra request.
            collector: Preconfigured collector to use instead of creating one; the
                token, ref, fallback_ref and on_warning arguments are then ignored.
            on_warning: Callable receiving warning messages.

        Raises:
            InputError: If the URL does not name a repository.
            UpstreamError: If the API request fails (see GitHubCollector.collect).
        """
        owns_collector = collector is None
        if collector is None:
            collector = GitHubCollector(
                token,
                ref=ref,
                fallback_ref=fallback_ref,
                exclusion_rules=exclusion_rules,
                on_warning=on_warning,
            )
        try:
            owner, repo = collector.parse_source(repository_url)
            tree_data, listed_ref = collector.get_tree_data(owner, repo)
            entries = collector.entries_from_tree(tree_data.get("tree", []))

            repository: Dict[str, Any] = {"name": repo, "owner": owner, "branch": listed_ref}
            if include_repository_info:
                info = collector.get_repository_info(owner, repo)
                repository.update(
                    description=info.get("description"),
                    stars=info.get("stargazers_count"),
                    forks=info.get("forks_count"),
                    url=info.get("html_url"),
                )
        finally:
            if owns_collector:
                collector.close()

        return cls(
            f"{owner}/{repo}",
            entries,
            exclusion_rules=exclusion_rules,
            max_depth=max_depth,
            repository=repository,
        )

    def stream_tree(self) -> Iterator[str]:
        """Generate the ASCII tree one newline-terminated line at a time."""
        yield from stream_tree_representation(self.tree)

    def render(self) -> str:
        """Get the ASCII tree as a single string."""
        return render(self.tree)

    def to_record(self) -> Dict[str, Any]:
        """Get the tree as plain nested dictionaries."""
        return to_record(self.tree)

    def report(self) -> TreeReport:
        exclusions = list(self.exclusion_rules.describe()) if self.exclusion_rules is not None else []
        return TreeReport(
            title=self.title,
            tree=self.tree,
            summary=self.summary,
            repository=self.repository,
            exclusions=exclusions,
        )

    def format(self, output_format: Union[str, OutputStrategy] = "text") -> str:
        """Format the tree with an output strategy or a format name from OUTPUT_FORMATS."""
        strategy = create_strategy(output_format) if isinstance(output_format, str) else output_format
        return strategy.format(self.report())
