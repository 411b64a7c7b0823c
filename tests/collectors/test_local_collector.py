"""Tests for listing local directories."""

import os
import re
from unittest.mock import patch

import pytest

from repotree.collectors.local_collector import LocalCollector, stat_metadata
from repotree.collectors.permission_action import PermissionAction
from repotree.exclusion_rules import GitIgnoreExclusionRules, SizeExclusionRules, SubstringExclusionRules
from repotree.types import EntryKind


@pytest.fixture
def project(tmp_path):
    """Create a small project tree."""
    (tmp_path / "src" / "utils").mkdir(parents=True)
    (tmp_path / "docs").mkdir()
    (tmp_path / "node_modules" / "react").mkdir(parents=True)

    (tmp_path / "src" / "main.py").write_text("print('hello')\n")
    (tmp_path / "src" / "utils" / "helpers.py").write_text("def helper():\n    pass\n")
    (tmp_path / "docs" / "guide.md").write_text("# Guide\n")
    (tmp_path / "node_modules" / "react" / "index.js").write_text("module.exports = {}\n")
    (tmp_path / "package.json").write_text("{}\n")
    (tmp_path / "big.bin").write_bytes(b"\0" * 4096)
    return tmp_path


@pytest.fixture
def warnings():
    return []


def paths(entries):
    return {entry.path_string for entry in entries}


def test_collect_lists_everything(project):
    entries = LocalCollector().collect(project)

    assert paths(entries) == {
        "big.bin",
        "docs",
        "docs/guide.md",
        "node_modules",
        "node_modules/react",
        "node_modules/react/index.js",
        "package.json",
        "src",
        "src/main.py",
        "src/utils",
        "src/utils/helpers.py",
    }


def test_kinds_and_sizes(project):
    entries = {entry.path_string: entry for entry in LocalCollector().collect(project)}

    assert entries["src"].kind is EntryKind.DIRECTORY
    assert entries["src"].size is None
    assert entries["big.bin"].kind is EntryKind.FILE
    assert entries["big.bin"].size == 4096
    assert entries["docs/guide.md"].size == len("# Guide\n")


def test_metadata(project):
    entries = {entry.path_string: entry for entry in LocalCollector().collect(project)}
    metadata = entries["src/main.py"].metadata

    assert set(metadata) == {"modified", "created", "permissions"}
    assert re.fullmatch(r"0[0-7]{3}", metadata["permissions"])
    assert metadata["modified"].endswith("+00:00")


def test_stat_metadata(project):
    os.chmod(project / "docs" / "guide.md", 0o640)
    metadata = stat_metadata(os.stat(project / "docs" / "guide.md"))
    assert metadata["permissions"] == "0640"


def test_substring_exclusion_skips_subtree(project):
    collector = LocalCollector(SubstringExclusionRules(["node_modules", "package.json"]))
    result = paths(collector.collect(project))

    assert not any("node_modules" in path for path in result)
    assert "package.json" not in result
    assert "src/main.py" in result


def test_excluded_directory_is_not_opened(project):
    rules = GitIgnoreExclusionRules()
    rules.add_rule("node_modules/")
    opened = []
    real_listdir = os.listdir

    def recording_listdir(path):
        opened.append(os.path.basename(path))
        return real_listdir(path)

    with patch("repotree.collectors.local_collector.os.listdir", side_effect=recording_listdir):
        LocalCollector(rules).collect(project)

    assert "node_modules" not in opened
    assert "react" not in opened


def test_size_exclusion(project):
    result = paths(LocalCollector(SizeExclusionRules(1024)).collect(project))

    assert "big.bin" not in result
    assert "src" in result


def test_max_depth(project):
    result = paths(LocalCollector(max_depth=1).collect(project))
    assert result == {"big.bin", "docs", "node_modules", "package.json", "src"}

    result = paths(LocalCollector(max_depth=2).collect(project))
    assert "src/utils" in result
    assert "src/utils/helpers.py" not in result


def test_negative_max_depth():
    with pytest.raises(ValueError, match="max_depth cannot be negative"):
        LocalCollector(max_depth=-1)


def test_missing_root(tmp_path):
    with pytest.raises(FileNotFoundError, match="does not exist"):
        LocalCollector().collect(tmp_path / "missing")


def test_root_is_file(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.write_text("x")
    with pytest.raises(NotADirectoryError):
        LocalCollector().collect(file_path)


def test_empty_root(tmp_path):
    assert LocalCollector().collect(tmp_path) == []


def test_paths_use_forward_slashes(project):
    for entry in LocalCollector().collect(project):
        assert "\\" not in entry.path_string
        assert not os.path.isabs(entry.path_string)


def denied_listdir(denied_name):
    real_listdir = os.listdir

    def listdir(path):
        if os.path.basename(path) == denied_name:
            raise PermissionError(13, "Permission denied", str(path))
        return real_listdir(path)

    return listdir


def test_unreadable_subdirectory_warns(project, warnings):
    collector = LocalCollector(on_warning=warnings.append)
    with patch("repotree.collectors.local_collector.os.listdir", side_effect=denied_listdir("utils")):
        result = paths(collector.collect(project))

    assert "src/utils" in result
    assert "src/utils/helpers.py" not in result
    assert "docs/guide.md" in result
    assert len(warnings) == 1
    assert warnings[0].startswith("Could not read")


def test_unreadable_subdirectory_ignored(project, warnings):
    collector = LocalCollector(permission_action=PermissionAction.IGNORE, on_warning=warnings.append)
    with patch("repotree.collectors.local_collector.os.listdir", side_effect=denied_listdir("utils")):
        result = paths(collector.collect(project))

    assert "src/utils" in result
    assert warnings == []


def test_unreadable_subdirectory_raises(project):
    collector = LocalCollector(permission_action=PermissionAction.RAISE)
    with patch("repotree.collectors.local_collector.os.listdir", side_effect=denied_listdir("utils")):
        with pytest.raises(PermissionError, match="Access denied"):
            collector.collect(project)


def test_unreadable_root_raises(project):
    collector = LocalCollector(permission_action=PermissionAction.IGNORE)
    with patch("repotree.collectors.local_collector.os.listdir", side_effect=denied_listdir(project.name)):
        with pytest.raises(PermissionError):
            collector.collect(project)


def test_default_warning_goes_to_stderr(project, capsys):
    with patch("repotree.collectors.local_collector.os.listdir", side_effect=denied_listdir("docs")):
        LocalCollector().collect(project)

    assert "Warning: Could not read" in capsys.readouterr().err


@pytest.fixture
def project_with_symlinks(project):
    try:
        os.symlink(project / "src", project / "build")
        os.symlink(project / "src", project / "src" / "utils" / "loop")
        os.symlink(project / "missing", project / "dangling")
    except (OSError, NotImplementedError):
        pytest.skip("Symlinks not supported on this platform")
    return project


def test_symlinks_not_followed(project_with_symlinks):
    entries = {entry.path_string: entry for entry in LocalCollector().collect(project_with_symlinks)}

    build = entries["build"]
    assert build.kind is EntryKind.FILE
    assert build.metadata["symlink_target"] == str(project_with_symlinks / "src")
    assert "build/main.py" not in entries
    assert entries["dangling"].kind is EntryKind.FILE
    assert entries["src/utils/loop"].kind is EntryKind.FILE


def test_symlinks_followed_with_loop_detection(project_with_symlinks, warnings):
    collector = LocalCollector(follow_symlinks=True, on_warning=warnings.append)
    entries = {entry.path_string: entry for entry in collector.collect(project_with_symlinks)}

    assert entries["build"].kind is EntryKind.DIRECTORY
    assert "build/main.py" in entries
    assert "build/utils/helpers.py" in entries

    loop = entries["src/utils/loop"]
    assert loop.kind is EntryKind.FILE
    assert loop.metadata["symlink_target"] == "[loop detected]"
    assert "src/utils/loop/main.py" not in entries
    assert any("Symlink loop detected" in message for message in warnings)

    # Dangling links are still reported
    assert entries["dangling"].kind is EntryKind.FILE
