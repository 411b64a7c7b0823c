"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import GitIgnoreSpec

from repotree.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Implementation of exclusion rules using .gitignore pattern syntax.

    Paths are matched with the pathspec library the same way Git matches them,
    including globs, directory-only patterns (ending in /), negations (!) and
    double-asterisk matching. Rules from files and rules added one by one are kept
    in order, so a later negation can re-include what an earlier pattern excluded.

    Directory-only patterns need to know when a path names a directory, which is
    why exclude() accepts ``is_dir``. The paths of everything beneath an excluded
    directory match too, so the whole subtree disappears.

    Attributes:
        spec (GitIgnoreSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.pyc")
        >>> rules.add_rule("build/")
        >>> rules.exclude("pkg/module.pyc")
        True
        >>> rules.exclude("build", is_dir=True)
        True
        >>> rules.exclude("build/output.js")
        True
        >>> rules.exclude("build")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to the file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = GitIgnoreSpec.from_lines(self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        if is_dir and not path.endswith("/"):
            path += "/"
        return bool(self.spec.match_file(path))

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and combine .gitignore patterns from one or more files.

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
                self._lines.extend(f.read().splitlines())

        self.spec = GitIgnoreSpec.from_lines(self._lines)

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern (e.g. ``"*.pyc"``, ``"dist/"``, ``"!keep.pyc"``)."""
        self._lines.append(rule)
        self.spec = GitIgnoreSpec.from_lines(self._lines)

    def has_rules(self) -> bool:
        return any(line.strip() and not line.lstrip().startswith("#") for line in self._lines)

    def describe(self) -> Sequence[str]:
        return [line.strip() for line in self._lines if line.strip() and not line.lstrip().startswith("#")]
