from __future__ import annotations

import hashlib
from typing import Sequence

from ..domain.exceptions import InvalidInputError
from ..domain.models import (
    AnalysisMetadata,
    AnalysisOutcome,
    AnalysisRecord,
    Finding,
    severity_breakdown,
)
from ..ports import (
    TIMESTAMP_FORMAT,
    AnalysisLogPort,
    ClockPort,
    IdGeneratorPort,
    KnowledgeBasePort,
    LoggerPort,
    ReportStorePort,
)
from .detection_engine import DetectionEngine
from .severity_filter import filter_by_severity


class AnalysisOrchestrator:
    """Runs the analyze → filter → persist → aggregate pipeline.

    Coordinates the detection engine with the analysis log, report store and
    knowledge base. One call runs to completion or raises; nothing is retried.
    """

    def __init__(
        self,
        *,
        engine: DetectionEngine,
        analysis_log: AnalysisLogPort,
        report_store: ReportStorePort,
        knowledge_base: KnowledgeBasePort,
        id_gen: IdGeneratorPort,
        clock: ClockPort,
        logger: LoggerPort,
    ) -> None:
        self._engine = engine
        self._analysis_log = analysis_log
        self._report_store = report_store
        self._knowledge_base = knowledge_base
        self._id_gen = id_gen
        self._clock = clock
        self._logger = logger

    def analyze(
        self,
        *,
        code: str,
        vulnerability_types: Sequence[str],
        severity_filter: str,
        test_mode: bool,
    ) -> AnalysisOutcome:
        """Analyze `code` and persist the outcome.

        Args:
            code: PHP source text
            vulnerability_types: Requested categories (unknown names ignored)
            severity_filter: Minimum severity to keep (unknown means low)
            test_mode: Generate proof-of-concept payloads

        Returns:
            AnalysisOutcome with the stored record, kept findings and report path

        Raises:
            InvalidInputError: If `code` is empty or whitespace only
            StorageError: If any persistence step fails
        """
        if not isinstance(code, str) or not code.strip():
            raise InvalidInputError("No code provided")

        # 1) Detect and filter
        findings = self._engine.analyze(code, vulnerability_types, include_examples=test_mode)
        kept = filter_by_severity(findings, severity_filter)
        self._logger.debug(
            "findings_detected",
            type="findings_detected",
            detected=len(findings),
            kept=len(kept),
        )

        # 2) Build the immutable record
        record = self._build_record(
            code=code,
            findings=kept,
            metadata=AnalysisMetadata(
                vulnerability_types=tuple(vulnerability_types),
                severity_filter=severity_filter,
                test_mode=test_mode,
            ),
        )

        # 3) Persist record, archival report, then aggregate
        log_path = self._analysis_log.record(record)
        report_path = self._report_store.save(record, kept)
        self._knowledge_base.aggregate(kept)

        self._logger.info(
            "analysis_logged",
            type="analysis_logged",
            analysis_id=record.id,
            vulnerabilities_found=record.vulnerabilities_found,
            severity_breakdown=record.severity_breakdown,
            log_path=str(log_path),
            report_path=str(report_path),
        )

        return AnalysisOutcome(
            record=record,
            findings=tuple(kept),
            report_path=str(report_path),
            include_examples=test_mode,
        )

    def _build_record(
        self,
        *,
        code: str,
        findings: Sequence[Finding],
        metadata: AnalysisMetadata,
    ) -> AnalysisRecord:
        raw = code.encode("utf-8")
        return AnalysisRecord(
            id=self._id_gen.generate(),
            timestamp=self._clock.now().strftime(TIMESTAMP_FORMAT),
            code_hash=hashlib.md5(raw, usedforsecurity=False).hexdigest(),
            code_length=len(raw),
            vulnerabilities_found=len(findings),
            severity_breakdown=severity_breakdown(findings),
            metadata=metadata,
            verified_findings=tuple(f for f in findings if f.verified),
        )
