from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from ..core.domain.exceptions import StorageError
from ..core.domain.models import Finding, KnowledgeBaseStats, PatternStats
from ..core.ports import TIMESTAMP_FORMAT, ClockPort, SystemClock

logger = logging.getLogger(__name__)


@dataclass
class _KnowledgeBaseState:
    total_analyses: int = 0
    total_vulnerabilities: int = 0
    patterns: dict[str, PatternStats] = field(default_factory=dict)
    verified_exploits: list[dict[str, Any]] = field(default_factory=list)
    last_updated: str | None = None
    # keys written by other tools are carried through rewrites untouched
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> _KnowledgeBaseState:
        known = {"total_analyses", "total_vulnerabilities", "patterns", "verified_exploits", "last_updated"}
        patterns = doc.get("patterns") or {}
        return cls(
            total_analyses=int(doc.get("total_analyses") or 0),
            total_vulnerabilities=int(doc.get("total_vulnerabilities") or 0),
            patterns={str(k): PatternStats.from_dict(v) for k, v in patterns.items()},
            verified_exploits=list(doc.get("verified_exploits") or []),
            last_updated=doc.get("last_updated"),
            extra={k: v for k, v in doc.items() if k not in known},
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "total_analyses": self.total_analyses,
            "total_vulnerabilities": self.total_vulnerabilities,
            "patterns": {k: v.to_dict() for k, v in self.patterns.items()},
            "verified_exploits": list(self.verified_exploits),
            "last_updated": self.last_updated,
        }
        doc.update(self.extra)
        return doc


class KnowledgeBaseStore:
    """Durable cumulative aggregate of every analysis on this installation.

    The document is read once, when the store is constructed, and the whole
    document is rewritten atomically after every aggregation. Readers only
    see the in-memory state.

    There is no cross-process locking: two processes sharing one file race,
    and the last full rewrite wins.
    """

    def __init__(self, *, path: Path, clock: ClockPort | None = None) -> None:
        """Load the knowledge base from `path` (an absent file means empty).

        Raises:
            StorageError: If the file exists but cannot be read or parsed
        """
        self._path = path
        self._clock = clock or SystemClock()
        self._state = self._load()
        logger.info(
            "knowledge_base_loaded",
            extra={
                "type": "knowledge_base_loaded",
                "path": str(path),
                "total_analyses": self._state.total_analyses,
                "unique_patterns": len(self._state.patterns),
            },
        )

    @property
    def path(self) -> Path:
        return self._path

    def aggregate(self, findings: Sequence[Finding]) -> None:
        now = self._clock.now().strftime(TIMESTAMP_FORMAT)
        # mutate a copy so a failed write leaves memory consistent with disk
        state = copy.deepcopy(self._state)

        state.total_analyses += 1
        state.total_vulnerabilities += len(findings)

        for f in findings:
            stats = state.patterns.get(f.pattern_signature)
            if stats is None:
                stats = PatternStats(count=0, severity=f.severity, first_seen=now)
                state.patterns[f.pattern_signature] = stats
            stats.count += 1
            # last write wins; no per-signature severity history is kept
            stats.severity = f.severity

            if f.verified:
                state.verified_exploits.append({
                    "pattern_signature": f.pattern_signature,
                    "proof_of_concept": f.proof_of_concept,
                    "timestamp": now,
                })

        state.last_updated = now
        self._write(state.to_document())
        self._state = state

        logger.info(
            "knowledge_base_updated",
            extra={
                "type": "knowledge_base_updated",
                "total_analyses": state.total_analyses,
                "total_vulnerabilities": state.total_vulnerabilities,
                "added": len(findings),
            },
        )

    def statistics(self) -> KnowledgeBaseStats:
        return KnowledgeBaseStats(
            total_analyses=self._state.total_analyses,
            total_vulnerabilities=self._state.total_vulnerabilities,
            unique_patterns=len(self._state.patterns),
            verified_exploits=len(self._state.verified_exploits),
            last_updated=self._state.last_updated,
        )

    def learned_patterns(self) -> dict[str, PatternStats]:
        return copy.deepcopy(self._state.patterns)

    def _load(self) -> _KnowledgeBaseState:
        if not self._path.exists():
            return _KnowledgeBaseState()
        try:
            doc = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(self._path, "Failed to read knowledge base") from e
        if not isinstance(doc, dict):
            raise StorageError(self._path, "Knowledge base is not a JSON object")
        try:
            return _KnowledgeBaseState.from_document(doc)
        except (ValueError, TypeError, AttributeError) as e:
            raise StorageError(self._path, "Malformed knowledge base") from e

    def _write(self, doc: dict[str, Any]) -> None:
        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=".knowledge_base.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_path = Path(fh.name)
                json.dump(doc, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise StorageError(self._path, "Failed to write knowledge base") from e
