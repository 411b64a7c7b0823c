"""Tests for PathEntry and path splitting."""

import dataclasses

import pytest

from repotree.path_entry import PathEntry, split_path
from repotree.types import EntryKind


@pytest.mark.parametrize(
    "path,expected",
    [
        ("a/b/c.txt", ("a", "b", "c.txt")),
        ("a\\b\\c.txt", ("a", "b", "c.txt")),
        ("a\\b/c.txt", ("a", "b", "c.txt")),
        ("/a//b/", ("a", "b")),
        ("file", ("file",)),
        ("", ()),
    ],
)
def test_split_path(path, expected):
    assert split_path(path) == expected


def test_from_path():
    entry = PathEntry.from_path("src\\lib\\util.py", EntryKind.FILE, size=12, metadata={"sha": "abc"})

    assert entry.path == ("src", "lib", "util.py")
    assert entry.name == "util.py"
    assert entry.path_string == "src/lib/util.py"
    assert entry.size == 12
    assert entry.metadata == {"sha": "abc"}
    assert not entry.is_dir


def test_directory_entry():
    entry = PathEntry.from_path("src", EntryKind.DIRECTORY)

    assert entry.is_dir
    assert entry.size is None
    assert entry.metadata == {}


def test_entries_are_immutable():
    entry = PathEntry.from_path("a.txt", EntryKind.FILE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.size = 10  # type: ignore[misc]


def test_metadata_is_copied():
    """Changing the caller's mapping afterwards does not affect the entry."""
    metadata = {"mode": "100644"}
    entry = PathEntry.from_path("a.txt", EntryKind.FILE, metadata=metadata)
    metadata["mode"] = "100755"

    assert entry.metadata == {"mode": "100644"}


def test_empty_path_name():
    assert PathEntry((), EntryKind.DIRECTORY).name == ""
