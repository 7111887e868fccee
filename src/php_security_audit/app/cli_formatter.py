"""JSON payloads for `--json` CLI output."""

from __future__ import annotations

from typing import Any, Sequence

from ..core.domain.models import AnalysisOutcome, AnalysisRecord, KnowledgeBaseSnapshot
from ..shared.to_jsonable import to_jsonable


def outcome_payload(outcome: AnalysisOutcome) -> dict[str, Any]:
    findings = [f.to_dict() for f in outcome.findings]
    if not outcome.include_examples:
        for f in findings:
            f.pop("proof_of_concept", None)
    return {
        "analysis_id": outcome.record.id,
        "report_path": outcome.report_path,
        "record": outcome.record.to_dict(),
        "findings": findings,
    }


def knowledge_payload(snapshot: KnowledgeBaseSnapshot) -> dict[str, Any]:
    """Statistics plus patterns; key order follows descending count."""
    return {
        "statistics": to_jsonable(snapshot.stats),
        "patterns": {sig: p.to_dict() for sig, p in snapshot.patterns},
    }


def recent_payload(records: Sequence[AnalysisRecord]) -> dict[str, Any]:
    return {
        "count": len(records),
        "analyses": [r.to_dict() for r in records],
    }
