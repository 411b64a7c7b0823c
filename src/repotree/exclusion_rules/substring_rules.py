"""Substring-based exclusion rules (the default exclusion set)."""

from os import PathLike
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from repotree.types import PathType

from .base_rules import BaseExclusionRules

DEFAULT_TREE_EXCLUDES: Tuple[str, ...] = ("node_modules", "package.json", "package-lock.json")
DEFAULT_JSON_EXCLUDES: Tuple[str, ...] = ("node_modules", "package-lock.json", ".git")


class SubstringExclusionRules(BaseExclusionRules):
    """Exclusion rules that match plain substrings of the full path.

    A path is excluded if any pattern occurs anywhere in its full relative path,
    not just in a single segment. Excluding ``"node_modules"`` therefore removes the
    directory and, since their paths contain it too, everything beneath it.

    Patterns keep the order in which they were added, which is also the order in
    which they are reported by describe().

    Attributes:
        patterns (List[str]): The configured substring patterns.

    Example:
        >>> rules = SubstringExclusionRules(DEFAULT_TREE_EXCLUDES)
        >>> rules.exclude("package.json")
        True
        >>> rules.exclude("src/node_modules_shim.js")
        True
        >>> rules.exclude("src/index.js")
        False
        >>> rules.add_rule(".log")
        >>> rules.exclude("logs/server.log")
        True
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns: List[str] = []
        for pattern in patterns or ():
            self.add_rule(pattern)

    def exclude(self, path: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        return any(pattern in path for pattern in self.patterns)

    def add_rule(self, rule: str) -> None:
        """Add a substring pattern. Empty patterns are rejected since they would match everything.

        Raises:
            ValueError: If the pattern is empty.
        """
        if not rule:
            raise ValueError("Exclusion pattern must not be empty")
        if rule not in self.patterns:
            self.patterns.append(rule)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load one pattern per non-blank line; lines starting with '#' are comments.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                for line in f.read().splitlines():
                    line = line.strip()
                    if line and not line.startswith("#"):
                        self.add_rule(line)

    def has_rules(self) -> bool:
        return bool(self.patterns)

    def describe(self) -> Sequence[str]:
        return list(self.patterns)
