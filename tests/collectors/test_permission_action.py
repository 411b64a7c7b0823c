"""Unit tests for the permission_action module."""

import pytest

from repotree.collectors.permission_action import PermissionAction


def test_permission_action_enum():
    assert PermissionAction.IGNORE == "ignore"
    assert PermissionAction.WARN == "warn"
    assert PermissionAction.RAISE == "raise"

    assert PermissionAction("warn") is PermissionAction.WARN
    assert PermissionAction("raise") is PermissionAction.RAISE


def test_invalid_permission_action():
    with pytest.raises(ValueError):
        PermissionAction("fail")
