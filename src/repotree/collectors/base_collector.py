"""Collector base class defining the interface for path listing sources."""

import sys
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from repotree.exclusion_rules.base_rules import BaseExclusionRules
from repotree.path_entry import PathEntry

WarningHandler = Callable[[str], None]


def print_warning(message: str) -> None:
    """Default warning handler: report on stderr."""
    print(f"Warning: {message}", file=sys.stderr)


class PathCollector(ABC):
    """Abstract base class for producers of flat path entry sequences.

    Local directories and remote repositories are listed by different collectors
    that share nothing but this output contract: a list of PathEntry objects in no
    particular order. Collectors keep configuration only. Every collect() call
    starts from scratch, so one collector can serve concurrent callers.

    Attributes:
        exclusion_rules (Optional[BaseExclusionRules]): Rules applied while listing.
        on_warning (WarningHandler): Callable receiving non-fatal problems.

    Example:
        >>> from repotree.types import EntryKind
        >>> class StaticCollector(PathCollector):
        ...     def collect(self, source: str) -> List[PathEntry]:
        ...         return [PathEntry.from_path(source, EntryKind.FILE, size=1)]
        >>> StaticCollector().collect("notes.txt")[0].path
        ('notes.txt',)
    """

    def __init__(
        self,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        on_warning: Optional[WarningHandler] = None,
    ) -> None:
        self.exclusion_rules = exclusion_rules
        self.on_warning: WarningHandler = on_warning or print_warning

    @abstractmethod
    def collect(self, source: str) -> List[PathEntry]:
        """List every object below source.

        Args:
            source: What to list; its form depends on the collector (a directory
                path, a repository URL, ...).

        Returns:
            The discovered entries, excluding anything matched by exclusion_rules.
        """
        pass

    def _is_excluded(self, path: str, size: Optional[int], is_dir: bool) -> bool:
        return self.exclusion_rules is not None and self.exclusion_rules.exclude(path, size, is_dir)
