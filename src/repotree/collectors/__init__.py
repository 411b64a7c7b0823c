"""Collectors producing flat path entry sequences from local and remote sources."""

from .base_collector import PathCollector, print_warning
from .github_collector import GitHubCollector, is_repository_url, parse_repository_url
from .local_collector import LocalCollector
from .permission_action import PermissionAction

__all__ = [
    "GitHubCollector",
    "LocalCollector",
    "PathCollector",
    "PermissionAction",
    "is_repository_url",
    "parse_repository_url",
    "print_warning",
]
