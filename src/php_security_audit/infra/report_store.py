from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..core.domain.exceptions import StorageError
from ..core.domain.models import AnalysisRecord, Finding
from .analysis_log import record_stem
from .html_report import render_html_report


class ReportStore:
    """Writes one HTML report per analysis, named after its log entry."""

    def __init__(self, *, analysis_dir: Path) -> None:
        self._analysis_dir = analysis_dir

    def save(self, record: AnalysisRecord, findings: Sequence[Finding]) -> Path:
        fp = self._analysis_dir / f"{record_stem(record)}_report.html"
        try:
            self._analysis_dir.mkdir(parents=True, exist_ok=True)
            fp.write_text(render_html_report(record, findings), encoding="utf-8")
        except OSError as e:
            raise StorageError(fp, "Failed to write HTML report") from e
        return fp
