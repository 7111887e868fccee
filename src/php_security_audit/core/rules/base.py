from __future__ import annotations

import re
from dataclasses import dataclass

from ..domain.models import Category, Finding, Severity


@dataclass(frozen=True)
class PatternRule:
    """A detection rule over raw source text.

    The rule fires when `pattern` matches somewhere in the text and none of
    the `guards` do. Guards describe mitigations (allow-lists, bound checks)
    whose presence anywhere in the text suppresses the finding. Matching is
    purely lexical, so false positives and negatives are expected.
    """
    name: str
    category: Category
    severity: Severity
    description: str
    signature: str
    example: str
    pattern: re.Pattern[str]
    guards: tuple[re.Pattern[str], ...] = ()

    def matches(self, text: str) -> bool:
        if not self.pattern.search(text):
            return False
        return not any(g.search(text) for g in self.guards)

    def to_finding(self, *, include_example: bool) -> Finding:
        return Finding(
            name=self.name,
            category=self.category,
            severity=self.severity,
            description=self.description,
            pattern_signature=self.signature,
            proof_of_concept=self.example if include_example else None,
        )
