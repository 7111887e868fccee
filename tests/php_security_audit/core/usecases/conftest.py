"""Shared test fixtures and fakes for UseCase tests."""
from datetime import datetime, timedelta
from pathlib import Path
from typing import Sequence

from php_security_audit.core.domain.models import (
    AnalysisRecord,
    Finding,
    KnowledgeBaseStats,
    PatternStats,
)


class FakeKnowledgeBase:
    def __init__(self, patterns: dict[str, PatternStats] | None = None):
        self.aggregated: list[list[Finding]] = []
        self._patterns = dict(patterns or {})
        self.fail_with: Exception | None = None

    def aggregate(self, findings: Sequence[Finding]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.aggregated.append(list(findings))

    def statistics(self) -> KnowledgeBaseStats:
        return KnowledgeBaseStats(
            total_analyses=len(self.aggregated),
            total_vulnerabilities=sum(len(f) for f in self.aggregated),
            unique_patterns=len(self._patterns),
            verified_exploits=0,
            last_updated=None,
        )

    def learned_patterns(self) -> dict[str, PatternStats]:
        return dict(self._patterns)


class FakeAnalysisLog:
    def __init__(self, records: list[AnalysisRecord] | None = None):
        self.records: list[AnalysisRecord] = list(records or [])
        self.recent_calls: list[int] = []

    def record(self, record: AnalysisRecord) -> Path:
        self.records.append(record)
        return Path(f"/fake/logs/{record.id}.json")

    def recent(self, limit: int = 10) -> list[AnalysisRecord]:
        self.recent_calls.append(limit)
        if limit <= 0:
            return []
        return list(reversed(self.records))[:limit]


class FakeReportStore:
    def __init__(self):
        self.saved: list[tuple[AnalysisRecord, list[Finding]]] = []

    def save(self, record: AnalysisRecord, findings: Sequence[Finding]) -> Path:
        self.saved.append((record, list(findings)))
        return Path(f"/fake/analysis/{record.id}_report.html")


class FakeProtocolSource:
    def __init__(self, text: str | None = "# Protocol"):
        self._text = text

    def read(self) -> str | None:
        return self._text


class FakeIdGen:
    def __init__(self):
        self._n = 0

    def generate(self) -> str:
        self._n += 1
        return f"analysis_{self._n:04d}"


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2024, 5, 1, 12, 0, 0)

    def now(self) -> datetime:
        current = self._now
        self._now = current + timedelta(seconds=1)
        return current


class FakeLogger:
    def __init__(self):
        self.records: list[tuple[str, str, dict]] = []

    def debug(self, message: str, **kwargs) -> None:
        self.records.append(("debug", message, kwargs))

    def info(self, message: str, **kwargs) -> None:
        self.records.append(("info", message, kwargs))

    def warning(self, message: str, **kwargs) -> None:
        self.records.append(("warning", message, kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self.records.append(("error", message, kwargs))

    def exception(self, message: str, **kwargs) -> None:
        self.records.append(("exception", message, kwargs))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]
