from __future__ import annotations

from typing import Iterable

from ..domain.models import Category, Finding
from ..rules import DEFAULT_RULE_SET, RuleSet


class DetectionEngine:
    """Applies the rule set to a blob of PHP source text.

    Findings come out in rule-set order (category, then rule), independent of
    the order in which categories were requested.
    """

    def __init__(self, *, rule_set: RuleSet = DEFAULT_RULE_SET) -> None:
        self._rule_set = rule_set

    @property
    def rule_set(self) -> RuleSet:
        return self._rule_set

    def analyze(
        self,
        text: str,
        categories: Iterable[str | Category],
        *,
        include_examples: bool,
    ) -> list[Finding]:
        """Run every rule of every requested category against `text`.

        Args:
            text: Raw source text; callers reject empty input beforehand
            categories: Requested categories; unknown names are ignored
            include_examples: Populate proof_of_concept on each finding

        Returns:
            Ordered list of findings, one per firing rule
        """
        requested = Category.parse_many(categories)
        findings: list[Finding] = []
        for category in self._rule_set.categories:
            if category not in requested:
                continue
            for rule in self._rule_set.rules_for(category):
                if rule.matches(text):
                    findings.append(rule.to_finding(include_example=include_examples))
        return findings
