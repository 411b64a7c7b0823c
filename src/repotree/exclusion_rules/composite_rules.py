"""Combination of several exclusion rule sets into one."""

from typing import Iterable, List, Optional, Sequence

from .base_rules import BaseExclusionRules


def _checked(rule: object, position: Optional[int] = None) -> BaseExclusionRules:
    if isinstance(rule, BaseExclusionRules):
        return rule
    where = "Rule" if position is None else f"Rule at index {position}"
    raise TypeError(f"{where} must implement BaseExclusionRules, got {type(rule).__name__}")


class CompositeExclusionRules(BaseExclusionRules):
    """Exclusion rules that OR together an ordered list of other rule sets.

    A path is excluded as soon as one member excludes it. This is how the CLI
    combines the substring exclusion set with gitignore patterns and a size
    limit. describe() lists the members' descriptions in member order.

    Attributes:
        rules (List[BaseExclusionRules]): The member rule sets, in order.

    Example:
        >>> from repotree.exclusion_rules.size_rules import SizeExclusionRules
        >>> from repotree.exclusion_rules.substring_rules import SubstringExclusionRules
        >>> composite = CompositeExclusionRules([SubstringExclusionRules([".git"]), SizeExclusionRules("10KB")])
        >>> composite.exclude(".git/HEAD", size=20)
        True
        >>> composite.exclude("data.csv", size=50_000)
        True
        >>> composite.exclude("README.md", size=2_000)
        False
    """

    def __init__(self, rules: Iterable[BaseExclusionRules]):
        """Combine rule sets.

        Raises:
            ValueError: If no rule set is given.
            TypeError: If a member is not a BaseExclusionRules.
        """
        self.rules: List[BaseExclusionRules] = [_checked(rule, i) for i, rule in enumerate(rules)]
        if not self.rules:
            raise ValueError("At least one exclusion rule must be provided")

    def exclude(self, path: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        return any(rule.exclude(path, size, is_dir) for rule in self.rules)

    def has_rules(self) -> bool:
        return any(rule.has_rules() for rule in self.rules)

    def describe(self) -> Sequence[str]:
        return [line for rule in self.rules for line in rule.describe()]

    def add_rule_object(self, rule: BaseExclusionRules) -> None:
        """Append another member rule set.

        Raises:
            TypeError: If rule is not a BaseExclusionRules.
        """
        self.rules.append(_checked(rule))

    def get_rules(self) -> List[BaseExclusionRules]:
        """Get a copy of the member list."""
        return self.rules[:]
