"""Output strategy base class defining the interface for tree report formatting.

This module provides the abstract base class that defines how a built tree and its
statistics are turned into a document, together with the report object that is
handed to every strategy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from repotree.stats import StatsSummary
from repotree.tree.tree_node import TreeNode


@dataclass
class TreeReport:
    """Everything an output strategy needs to produce a document.

    Attributes:
        title (str): Name of what was listed (directory name or owner/repo).
        tree (TreeNode): Root of the built tree.
        summary (StatsSummary): Statistics computed over the tree.
        repository (Optional[Dict[str, Any]]): Repository information for remote sources.
        exclusions (Sequence[str]): Human-readable description of the exclusion rules.
        generated_at (datetime): When the report was produced (UTC).
    """

    title: str
    tree: TreeNode
    summary: StatsSummary
    repository: Optional[Dict[str, Any]] = None
    exclusions: Sequence[str] = ()
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class OutputStrategy(ABC):
    """Abstract base class defining the interface for tree report output formats.

    This class implements the Strategy pattern for rendering the same report in
    different formats (plain ASCII tree, JSON, markdown). Strategies are stateless:
    format() may be called any number of times with different reports.

    Example:
        >>> class NameOnlyStrategy(OutputStrategy):
        ...     def format(self, report: TreeReport) -> str:
        ...         return report.title + "\\n"
        ...
        ...     def get_file_extension(self) -> str:
        ...         return ".name"
    """

    @abstractmethod
    def format(self, report: TreeReport) -> str:
        """Format a complete report.

        Args:
            report: The tree, its statistics and descriptive information.

        Returns:
            The formatted document, ending with a newline unless it is empty.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this output format.

        Returns:
            The file extension including the leading dot (e.g., ".txt", ".json").
        """
        pass
