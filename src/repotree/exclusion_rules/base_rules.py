from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence, Tuple, Union

from repotree.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for path exclusion rules.

    Exclusion rules decide which collected paths are dropped before they reach the
    tree. Collectors consult them while listing (so an excluded directory is never
    descended into) and the tree builder consults them again when folding entries,
    so entries from any source are filtered the same way.

    Paths are always given relative to the collection root, joined with forward
    slashes. The optional size lets rules that care about file size work for remote
    entries, which have no local file to inspect.

    Example:
        >>> from repotree.exclusion_rules.substring_rules import SubstringExclusionRules
        >>> rules = SubstringExclusionRules(["node_modules"])
        >>> rules.exclude("web/node_modules/react/index.js")
        True
        >>> rules.exclude("web/src/index.js")
        False
        >>>
        >>> # Rules that don't support programmatic additions say so explicitly
        >>> from repotree.exclusion_rules.size_rules import SizeExclusionRules
        >>> size_rules = SizeExclusionRules("1MB")
        >>> size_rules.max_size_bytes
        1000000
        >>> # size_rules.add_rule('*.log')  # Would raise NotImplementedError
    """

    @abstractmethod
    def exclude(self, path: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): The file or directory path to check, relative to the
                collection root and joined with forward slashes.
            size (Optional[int]): Size of the object in bytes, when known.
            is_dir (bool): Whether the path names a directory. Pattern-based rules
                use this to match directory-only patterns such as ``build/``.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def exclude_with_parents(
        self,
        segments: Sequence[str],
        size: Optional[int] = None,
        is_dir: bool = False,
        checked_dirs: Optional[Dict[Tuple[str, ...], bool]] = None,
    ) -> bool:
        """
        Determine if a path, or any directory above it, should be excluded.

        A flat listing holds entries whose parent directories were excluded; a
        directory walk never reaches those. Checking every parent first makes
        both kinds of source agree, even when a later negation pattern would
        re-include the entry itself.

        Args:
            segments: The path split into its components.
            size: Size of the object in bytes, when known.
            is_dir: Whether the path names a directory.
            checked_dirs: Optional cache of directory verdicts shared across calls.

        Example:
            >>> from repotree.exclusion_rules.git_rules import GitIgnoreExclusionRules
            >>> rules = GitIgnoreExclusionRules()
            >>> rules.add_rule("build/")
            >>> rules.add_rule("!build/keep.txt")
            >>> rules.exclude("build/keep.txt")
            False
            >>> rules.exclude_with_parents(["build", "keep.txt"])
            True
        """
        if checked_dirs is None:
            checked_dirs = {}
        for depth in range(1, len(segments)):
            parent = tuple(segments[:depth])
            if parent not in checked_dirs:
                checked_dirs[parent] = self.exclude("/".join(parent), None, True)
            if checked_dirs[parent]:
                return True
        return self.exclude("/".join(segments), size, is_dir)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load exclusion rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add. The format depends on the specific
                implementation (a substring, a gitignore pattern, ...).

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")

    def has_rules(self) -> bool:
        """Check whether any rules are configured.

        Returns:
            True unless the implementation knows it is empty.
        """
        return True

    def describe(self) -> Sequence[str]:
        """Describe the configured rules for inclusion in generated documentation.

        Returns:
            One human-readable line per rule. Empty if the rule type has nothing
            meaningful to list.
        """
        return []
