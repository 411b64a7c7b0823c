from datetime import datetime, timezone

import pytest

from repotree.output_strategies.base_strategy import TreeReport
from repotree.path_entry import PathEntry
from repotree.stats import summarize
from repotree.tree.builder import build_tree
from repotree.types import EntryKind

GENERATED_AT = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def tree():
    files = {
        "src/index.js": 300,
        "src/components/Button.jsx": 700,
        "src/services/api.js": 200,
        "src/models/user.py": 100,
        "src/helpers.py": 50,
        "tests/app.test.js": 150,
        "config.yaml": 20,
        "README.md": 504,
    }
    return build_tree([PathEntry.from_path(path, EntryKind.FILE, size) for path, size in files.items()])


@pytest.fixture
def local_report(tree):
    return TreeReport(
        title="demo",
        tree=tree,
        summary=summarize(tree),
        exclusions=["node_modules", "*.log"],
        generated_at=GENERATED_AT,
    )


@pytest.fixture
def remote_report(tree):
    repository = {
        "name": "demo",
        "owner": "octo",
        "branch": "main",
        "description": "A demo project",
        "stars": 42,
        "forks": 7,
        "url": "https://github.com/octo/demo",
    }
    return TreeReport(
        title="octo/demo",
        tree=tree,
        summary=summarize(tree),
        repository=repository,
        generated_at=GENERATED_AT,
    )
