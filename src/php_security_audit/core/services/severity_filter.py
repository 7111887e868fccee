from __future__ import annotations

from typing import Sequence

from ..domain.models import Finding, Severity


def filter_by_severity(findings: Sequence[Finding], min_severity: str | Severity | None) -> list[Finding]:
    """Keep findings at or above `min_severity`, preserving order.

    An unrecognized floor falls back to LOW, which keeps everything.
    """
    floor = Severity.parse(min_severity) or Severity.LOW
    return [f for f in findings if f.severity.rank >= floor.rank]
