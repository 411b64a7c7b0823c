"""Tests for folding path entries into a tree."""

import itertools

import pytest
from anytree import PreOrderIter

from repotree.exclusion_rules import GitIgnoreExclusionRules, SubstringExclusionRules
from repotree.path_entry import PathEntry
from repotree.tree.builder import build_tree, sort_tree
from repotree.tree.renderer import render, to_record
from repotree.tree.tree_node import TreeNode
from repotree.types import EntryKind

FILE = EntryKind.FILE
DIRECTORY = EntryKind.DIRECTORY


def entry(path, kind=FILE, size=None, **metadata):
    if kind is FILE and size is None:
        size = 1
    return PathEntry.from_path(path, kind, size, metadata)


@pytest.fixture
def project_entries():
    return [
        entry("src", DIRECTORY, mode="040000"),
        entry("src/main.py", size=120),
        entry("src/utils", DIRECTORY),
        entry("src/utils/helpers.py", size=64),
        entry("README.md", size=300),
        entry("docs/index.md", size=50),
        entry("Makefile", size=10),
    ]


def child_names(node):
    return [child.name for child in node.children]


def test_example_tree_renders():
    tree = build_tree([entry("a/b.txt"), entry("a", DIRECTORY), entry("c.txt")])
    assert render(tree) == "├── a\n│   └── b.txt\n└── c.txt\n"


def test_empty_input():
    tree = build_tree([])

    assert tree.name == "."
    assert tree.is_dir
    assert tree.children == ()
    assert render(tree) == ""


def test_root_name():
    assert build_tree([], root_name="owner/repo").name == "owner/repo"


def test_intermediate_directories_are_synthesized():
    tree = build_tree([entry("a/b/c/d.txt", size=4)])

    a = tree.children[0]
    b = a.children[0]
    c = b.children[0]
    assert [a.name, b.name, c.name] == ["a", "b", "c"]
    assert all(node.is_dir and node.metadata == {} and node.file_size is None for node in (a, b, c))
    assert c.children[0].name == "d.txt"
    assert c.children[0].file_size == 4


def test_explicit_directory_fills_metadata():
    """A directory entry arriving after its contents supplies the directory's metadata."""
    tree = build_tree([entry("src/main.py"), entry("src", DIRECTORY, mode="040000")])

    src = tree.children[0]
    assert src.metadata == {"mode": "040000"}
    assert child_names(src) == ["main.py"]


def test_order_independence(project_entries):
    expected = to_record(build_tree(project_entries))

    for permutation in itertools.permutations(project_entries):
        assert to_record(build_tree(permutation)) == expected


def test_sibling_order(project_entries):
    """Directories come first, then files, each group in codepoint order."""
    tree = build_tree(project_entries)

    for node in PreOrderIter(tree):
        children = list(node.children)
        directories = [child for child in children if child.is_dir]
        files = [child for child in children if not child.is_dir]
        assert children == directories + files
        assert [child.name for child in directories] == sorted(child.name for child in directories)
        assert [child.name for child in files] == sorted(child.name for child in files)

    assert child_names(tree) == ["docs", "src", "Makefile", "README.md"]


def test_sorting_is_case_sensitive():
    tree = build_tree([entry("b.txt"), entry("B.txt"), entry("a.txt"), entry("_x.txt")])
    assert child_names(tree) == ["B.txt", "_x.txt", "a.txt", "b.txt"]


def test_sibling_names_are_unique():
    tree = build_tree([entry("a/x.txt"), entry("a/y.txt"), entry("a", DIRECTORY), entry("a", DIRECTORY)])

    assert child_names(tree) == ["a"]
    assert child_names(tree.children[0]) == ["x.txt", "y.txt"]


def test_duplicate_file_keeps_first():
    tree = build_tree([entry("a.txt", size=1, sha="first"), entry("a.txt", size=2, sha="second")])

    assert len(tree.children) == 1
    assert tree.children[0].file_size == 1
    assert tree.children[0].metadata == {"sha": "first"}


def test_file_then_directory_conflict_keeps_file():
    tree = build_tree([entry("a", size=3), entry("a", DIRECTORY), entry("a/b.txt")])

    assert len(tree.children) == 1
    node = tree.children[0]
    assert not node.is_dir
    assert node.children == ()


def test_directory_then_file_conflict_keeps_directory():
    tree = build_tree([entry("a/b.txt"), entry("a", size=3)])

    node = tree.children[0]
    assert node.is_dir
    assert child_names(node) == ["b.txt"]


def test_files_have_no_children(project_entries):
    tree = build_tree(project_entries + [entry("README.md/nested.txt")])
    for node in PreOrderIter(tree):
        if not node.is_dir:
            assert node.children == ()


def test_exclusion_removes_subtree():
    rules = SubstringExclusionRules(["node_modules"])
    tree = build_tree(
        [entry("node_modules", DIRECTORY), entry("node_modules/react/index.js"), entry("src/app.js")],
        exclusion_rules=rules,
    )

    assert render(tree) == "└── src\n    └── app.js\n"
    for node in PreOrderIter(tree):
        assert "node_modules" not in node.name


@pytest.mark.parametrize("with_directory_entry", [True, False])
def test_negation_cannot_revive_excluded_directory(with_directory_entry):
    rules = GitIgnoreExclusionRules()
    rules.add_rule("build/")
    rules.add_rule("!build/keep.txt")
    entries = [entry("build/keep.txt"), entry("build/drop.js"), entry("src/keep.txt")]
    if with_directory_entry:
        entries.insert(0, entry("build", DIRECTORY))

    assert render(build_tree(entries, exclusion_rules=rules)) == "└── src\n    └── keep.txt\n"


def test_max_depth():
    entries = [entry("a/b/c.txt"), entry("a/top.txt"), entry("root.txt")]

    assert render(build_tree(entries, max_depth=1)) == "└── root.txt\n"
    assert render(build_tree(entries, max_depth=2)) == "├── a\n│   └── top.txt\n└── root.txt\n"
    assert render(build_tree(entries, max_depth=0)) == ""


def test_empty_paths_are_skipped():
    tree = build_tree([PathEntry((), DIRECTORY), entry("a.txt")])
    assert child_names(tree) == ["a.txt"]


def test_directory_size_is_none():
    tree = build_tree([PathEntry.from_path("dir", DIRECTORY, size=4096)])
    assert tree.children[0].file_size is None


def test_sort_tree_returns_node():
    root = TreeNode(".", kind=DIRECTORY)
    TreeNode("z.txt", parent=root)
    TreeNode("lib", parent=root, kind=DIRECTORY)

    assert sort_tree(root) is root
    assert child_names(root) == ["lib", "z.txt"]


def test_file_size_survives_build():
    tree = build_tree([entry("src/app.js", size=2048), entry("src", DIRECTORY), entry("README", size=0)])
    src, readme = tree.children

    assert src.children[0].file_size == 2048
    assert readme.file_size == 0
    assert src.file_size is None
    # anytree's own node count stays intact
    assert tree.size == 4
