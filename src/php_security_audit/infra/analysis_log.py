from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from ..core.domain.exceptions import StorageError
from ..core.domain.models import AnalysisRecord
from ..core.ports import FILE_TIMESTAMP_FORMAT, TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


def record_stem(record: AnalysisRecord) -> str:
    """File stem shared by the log entry and the HTML report of one analysis.

    The timestamp prefix partitions files by time; the id suffix keeps two
    analyses in the same second apart.
    """
    ts = datetime.strptime(record.timestamp, TIMESTAMP_FORMAT).strftime(FILE_TIMESTAMP_FORMAT)
    return f"{ts}_{record.id}"


class AnalysisLog:
    """Write-once JSON documents, one per analysis.

    Files are named `<timestamp>_<id>.json`, so name order is chronological.
    """

    def __init__(self, *, logs_dir: Path) -> None:
        self._logs_dir = logs_dir

    def record(self, record: AnalysisRecord) -> Path:
        fp = self._logs_dir / f"{record_stem(record)}.json"
        try:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            # "x" refuses to overwrite an existing entry
            with fp.open("x", encoding="utf-8") as fh:
                json.dump(record.to_dict(), fh, ensure_ascii=False, indent=2)
        except FileExistsError as e:
            raise StorageError(fp, "Analysis log entry already exists") from e
        except OSError as e:
            raise StorageError(fp, "Failed to write analysis log entry") from e
        return fp

    def recent(self, limit: int = 10) -> list[AnalysisRecord]:
        if limit <= 0 or not self._logs_dir.is_dir():
            return []

        files = sorted(
            (p for p in self._logs_dir.glob("*.json") if p.is_file()),
            key=lambda p: p.name,
            reverse=True,
        )

        records: list[AnalysisRecord] = []
        for fp in files:
            if len(records) >= limit:
                break
            try:
                data = json.loads(fp.read_text(encoding="utf-8"))
                records.append(AnalysisRecord.from_dict(data))
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.warning(
                    "analysis_log_unreadable",
                    extra={"type": "analysis_log_unreadable", "path": str(fp), "error": str(e)},
                )
        return records
