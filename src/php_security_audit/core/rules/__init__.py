from __future__ import annotations

from collections.abc import Iterator, Mapping

from ..domain.models import Category
from . import dos, sql_injection, xss
from .base import PatternRule


class RuleSet:
    """Closed mapping of categories to their ordered rules.

    Iteration order is registration order, which the detection engine relies
    on to produce a stable finding order.
    """

    def __init__(self, rules: Mapping[Category, tuple[PatternRule, ...]]) -> None:
        for category, items in rules.items():
            for rule in items:
                if rule.category is not category:
                    raise ValueError(f"Rule {rule.name!r} registered under {category.value}")
        self._rules = dict(rules)

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._rules)

    def rules_for(self, category: Category) -> tuple[PatternRule, ...]:
        return self._rules.get(category, ())

    def __iter__(self) -> Iterator[PatternRule]:
        for items in self._rules.values():
            yield from items

    def __len__(self) -> int:
        return sum(len(items) for items in self._rules.values())


DEFAULT_RULE_SET = RuleSet({
    Category.SQL_INJECTION: sql_injection.RULES,
    Category.XSS: xss.RULES,
    Category.DOS: dos.RULES,
})

__all__ = [
    "PatternRule",
    "RuleSet",
    "DEFAULT_RULE_SET",
]
