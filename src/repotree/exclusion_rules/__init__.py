"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .size_rules import SizeExclusionRules
from .substring_rules import DEFAULT_JSON_EXCLUDES, DEFAULT_TREE_EXCLUDES, SubstringExclusionRules

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "DEFAULT_JSON_EXCLUDES",
    "DEFAULT_TREE_EXCLUDES",
    "GitIgnoreExclusionRules",
    "SizeExclusionRules",
    "SubstringExclusionRules",
]
