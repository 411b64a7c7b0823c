"""Markdown documentation output strategy.

Produces a project structure document: repository information, summary
statistics, an overview of notable files grouped by role, the ASCII tree and the
exclusions that were in effect.
"""

from typing import Dict, List, Optional, Tuple

from anytree import PreOrderIter

from repotree.stats import file_extension
from repotree.tree.renderer import render

from .base_strategy import OutputStrategy, TreeReport

SOURCE_EXTENSIONS = frozenset({".js", ".jsx", ".ts", ".tsx", ".py"})
CONFIG_EXTENSIONS = frozenset({".json", ".yaml", ".yml", ".env", ".config", ".toml", ".ini", ".cfg"})
ENTRY_POINT_STEMS = frozenset({"index", "main", "app", "__main__"})

# Directory names that decide a source file's role, checked in this order
DIRECTORY_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("components", "components"),
    ("services", "services"),
    ("utils", "utilities"),
    ("models", "models"),
    ("routes", "routes"),
)

CATEGORY_TITLES: Tuple[Tuple[str, str], ...] = (
    ("entry_points", "Entry Points"),
    ("services", "Services"),
    ("models", "Data Models"),
    ("components", "Components"),
    ("routes", "Routes"),
    ("utilities", "Utilities"),
    ("source", "Other Source Files"),
    ("tests", "Tests"),
    ("config", "Configuration Files"),
)


def categorize_file(path: str) -> Optional[str]:
    """Classify a file by its role in the project.

    Args:
        path: Path relative to the root, joined with forward slashes.

    Returns:
        One of the keys of CATEGORY_TITLES, or None for files that are not worth
        listing (documentation, assets, ...).

    Example:
        >>> categorize_file("src/components/Button.jsx")
        'components'
        >>> categorize_file("src/index.js")
        'entry_points'
        >>> categorize_file("src/user.service.ts")
        'services'
        >>> categorize_file("tests/test_api.py")
        'tests'
        >>> categorize_file("docker-compose.yml")
        'config'
        >>> categorize_file("README.md") is None
        True
    """
    segments = path.split("/")
    name = segments[-1]
    if ".test." in name or ".spec." in name or name.startswith("test_"):
        return "tests"

    extension = file_extension(name)
    if extension in SOURCE_EXTENSIONS:
        for directory, category in DIRECTORY_CATEGORIES:
            if directory in segments[:-1]:
                return category
        lowered = name.lower()
        if lowered.split(".")[0] in ENTRY_POINT_STEMS:
            return "entry_points"
        if "service" in lowered or "api" in lowered:
            return "services"
        if "model" in lowered or "schema" in lowered:
            return "models"
        return "source"
    if extension in CONFIG_EXTENSIONS:
        return "config"
    return None


class MarkdownOutputStrategy(OutputStrategy):
    """Output strategy that formats a report as markdown documentation.

    Sections without content (for example the repository block for a local
    directory, or an empty file category) are left out.
    """

    def format(self, report: TreeReport) -> str:
        lines: List[str] = [
            f"# {report.title} - Project Structure",
            f"Generated on: {report.generated_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
            "",
        ]

        if report.repository:
            lines.extend(self._repository_section(report.repository))

        lines.extend(self._summary_section(report))
        lines.extend(self._overview_section(report))

        lines.extend(["## Directory Structure", "```"])
        tree_text = render(report.tree)
        if tree_text:
            lines.append(tree_text.rstrip("\n"))
        lines.extend(["```", ""])

        if report.exclusions:
            lines.append("## Excluded Items")
            lines.append("The following patterns were excluded from this tree:")
            lines.extend(f"- `{pattern}`" for pattern in report.exclusions)
            lines.append("")

        return "\n".join(lines)

    def _repository_section(self, repository: Dict[str, object]) -> List[str]:
        lines = ["## Repository Information"]
        for key, label in (
            ("name", "Name"),
            ("owner", "Owner"),
            ("branch", "Branch"),
            ("description", "Description"),
            ("stars", "Stars"),
            ("forks", "Forks"),
            ("url", "URL"),
        ):
            value = repository.get(key)
            if value is not None and value != "":
                lines.append(f"- {label}: {value}")
        lines.append("")
        return lines

    def _summary_section(self, report: TreeReport) -> List[str]:
        summary = report.summary
        lines = [
            "## Summary",
            f"- Total Files: {summary.total_files}",
            f"- Total Directories: {summary.total_directories}",
            f"- Total Size: {summary.total_size}",
            f"- Max Depth: {summary.max_depth}",
            "",
        ]
        if summary.file_types:
            lines.append("### File Types")
            for extension, count in summary.sorted_file_types().items():
                lines.append(f"- `{extension}`: {count} {'file' if count == 1 else 'files'}")
            lines.append("")
        return lines

    def _overview_section(self, report: TreeReport) -> List[str]:
        categories: Dict[str, List[str]] = {}
        root = report.tree
        for node in PreOrderIter(root):
            if node is root or node.is_dir:
                continue
            path = "/".join(ancestor.name for ancestor in node.path[1:])
            category = categorize_file(path)
            if category is not None:
                categories.setdefault(category, []).append(path)

        if not categories:
            return []

        lines = ["## Project Overview", ""]
        for key, title in CATEGORY_TITLES:
            paths = categories.get(key)
            if paths:
                lines.append(f"### {title}")
                lines.extend(f"- `{path}`" for path in paths)
                lines.append("")
        return lines

    def get_file_extension(self) -> str:
        return ".md"
