from __future__ import annotations

import secrets
import time
from datetime import datetime
from pathlib import Path
from typing import Protocol, Sequence

from .domain.models import AnalysisRecord, Finding, KnowledgeBaseStats, PatternStats


class KnowledgeBasePort(Protocol):
    """Port for the cumulative knowledge base.

    Implementations load their state once and rewrite the whole document on
    every aggregation.
    """

    def aggregate(self, findings: Sequence[Finding]) -> None:
        """Fold one analysis worth of findings into the aggregate and persist it.

        Raises:
            StorageError: If the knowledge base cannot be written
        """
        ...

    def statistics(self) -> KnowledgeBaseStats:
        ...

    def learned_patterns(self) -> dict[str, PatternStats]:
        ...


class AnalysisLogPort(Protocol):
    """Port for the write-once per-analysis record log."""

    def record(self, record: AnalysisRecord) -> Path:
        """Persist one record and return where it was written.

        Raises:
            StorageError: If the record cannot be written
        """
        ...

    def recent(self, limit: int = 10) -> list[AnalysisRecord]:
        """Return up to `limit` records, newest first."""
        ...


class ReportStorePort(Protocol):
    """Port for archival human-readable reports."""

    def save(self, record: AnalysisRecord, findings: Sequence[Finding]) -> Path:
        ...


class ProtocolSourcePort(Protocol):
    def read(self) -> str | None:
        """Return the audit protocol text, or None when unavailable."""
        ...


class IdGeneratorPort(Protocol):
    def generate(self) -> str:
        ...


class ClockPort(Protocol):
    def now(self) -> datetime:
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Extra keyword arguments are attached to the record as structured fields.
    """

    def debug(self, message: str, **kwargs) -> None:
        ...

    def info(self, message: str, **kwargs) -> None:
        ...

    def warning(self, message: str, **kwargs) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        ...

    def exception(self, message: str, **kwargs) -> None:
        ...


class DefaultIdGenerator:
    """Time-ordered analysis identifiers: lexical order follows creation order."""

    def generate(self) -> str:
        return f"analysis_{time.time_ns():016x}{secrets.token_hex(4)}"


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
