"""JSON output strategy for tree reports.

This module provides a strategy that writes the persisted tree artifact: a JSON
document holding the generation timestamp, the summary statistics and the full
tree record.
"""

import json
from typing import Any, Dict

from repotree.tree.renderer import to_record

from .base_strategy import OutputStrategy, TreeReport


class JSONOutputStrategy(OutputStrategy):
    """Output strategy that formats a report as a JSON document.

    The document has the following structure:
    {
        "generatedAt": "2024-05-01T12:00:00+00:00",
        "repository": {...},  # Only for remote sources
        "summary": {"totalFiles": 3, "totalDirectories": 1, "totalSize": "1.5 KB", ...},
        "tree": {"name": ".", "type": "directory", "metadata": {}, "children": [...]}
    }

    Non-ASCII names are written as-is rather than escaped.

    Attributes:
        indent (int): Indentation passed to json.dumps.

    Example:
        >>> from datetime import datetime, timezone
        >>> from repotree.stats import summarize
        >>> from repotree.tree.builder import build_tree
        >>> tree = build_tree([])
        >>> generated_at = datetime(2024, 5, 1, 12, tzinfo=timezone.utc)
        >>> report = TreeReport(".", tree, summarize(tree), generated_at=generated_at)
        >>> data = json.loads(JSONOutputStrategy().format(report))
        >>> data["generatedAt"], data["summary"]["totalSize"], data["tree"]["children"]
        ('2024-05-01T12:00:00+00:00', '0 Bytes', [])
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def build_document(self, report: TreeReport) -> Dict[str, Any]:
        """Assemble the document as plain dictionaries before serialization."""
        document: Dict[str, Any] = {"generatedAt": report.generated_at.isoformat()}
        if report.repository is not None:
            document["repository"] = report.repository
        document["summary"] = report.summary.to_dict()
        document["tree"] = to_record(report.tree)
        return document

    def format(self, report: TreeReport) -> str:
        return json.dumps(self.build_document(report), indent=self.indent, ensure_ascii=False) + "\n"

    def get_file_extension(self) -> str:
        return ".json"
