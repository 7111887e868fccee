from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class Category(str, Enum):
    """Vulnerability categories a caller may request.

    Only SQL_INJECTION, XSS and DOS have registered rules; the remaining
    members are reserved and simply produce no findings.
    """
    SQL_INJECTION = "sql_injection"
    XSS = "xss"
    DOS = "dos"
    FILE_UPLOAD = "file_upload"
    CSRF = "csrf"
    AUTH = "auth"
    INFO_DISCLOSURE = "info_disclosure"

    @classmethod
    def parse(cls, value: str | Category) -> Category | None:
        """Return the matching member or None for unknown names."""
        if isinstance(value, Category):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None

    @classmethod
    def parse_many(cls, values: Iterable[str | Category]) -> set[Category]:
        parsed = (cls.parse(v) for v in values)
        return {c for c in parsed if c is not None}


class Severity(str, Enum):
    """Finding severity, ordered LOW < MEDIUM < HIGH < CRITICAL."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @classmethod
    def parse(cls, value: str | Severity | None, default: Severity | None = None) -> Severity | None:
        """Case-insensitive lookup; returns `default` for unrecognized input."""
        if isinstance(value, Severity):
            return value
        if value is None:
            return default
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default


_SEVERITY_RANK = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


@dataclass(frozen=True)
class Finding:
    """One issue produced by a single rule match."""
    name: str
    category: Category
    severity: Severity
    description: str
    pattern_signature: str
    proof_of_concept: str | None = None
    verified: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category.value,
            "severity": self.severity.value,
            "description": self.description,
            "pattern_signature": self.pattern_signature,
            "proof_of_concept": self.proof_of_concept,
            "verified": self.verified,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Finding:
        return cls(
            name=str(data["name"]),
            category=Category(data["category"]),
            severity=Severity(data["severity"]),
            description=str(data.get("description", "")),
            pattern_signature=str(data["pattern_signature"]),
            proof_of_concept=data.get("proof_of_concept"),
            verified=bool(data.get("verified", False)),
        )


def severity_breakdown(findings: Iterable[Finding]) -> dict[str, int]:
    """Count findings per severity bucket, highest first, all buckets present."""
    counts = {s.value: 0 for s in (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW)}
    for f in findings:
        counts[f.severity.value] += 1
    return counts


@dataclass(frozen=True)
class AnalysisMetadata:
    """Caller-supplied configuration of one analysis call."""
    vulnerability_types: tuple[str, ...]
    severity_filter: str
    test_mode: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "vulnerability_types": list(self.vulnerability_types),
            "severity_filter": self.severity_filter,
            "test_mode": self.test_mode,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisMetadata:
        return cls(
            vulnerability_types=tuple(str(v) for v in data.get("vulnerability_types") or ()),
            severity_filter=str(data.get("severity_filter", "")),
            test_mode=bool(data.get("test_mode", False)),
        )


@dataclass(frozen=True)
class AnalysisRecord:
    """Immutable record of one analysis invocation."""
    id: str
    timestamp: str
    code_hash: str
    code_length: int
    vulnerabilities_found: int
    severity_breakdown: dict[str, int]
    metadata: AnalysisMetadata
    verified_findings: tuple[Finding, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "code_hash": self.code_hash,
            "code_length": self.code_length,
            "vulnerabilities_found": self.vulnerabilities_found,
            "severity_breakdown": dict(self.severity_breakdown),
            "metadata": self.metadata.to_dict(),
            "verified_findings": [f.to_dict() for f in self.verified_findings],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisRecord:
        breakdown = {k.lower(): int(v) for k, v in (data.get("severity_breakdown") or {}).items()}
        for s in Severity:
            breakdown.setdefault(s.value, 0)
        return cls(
            id=str(data["id"]),
            timestamp=str(data["timestamp"]),
            code_hash=str(data.get("code_hash", "")),
            code_length=int(data.get("code_length", 0)),
            vulnerabilities_found=int(data.get("vulnerabilities_found", 0)),
            severity_breakdown=breakdown,
            metadata=AnalysisMetadata.from_dict(data.get("metadata") or {}),
            verified_findings=tuple(Finding.from_dict(f) for f in data.get("verified_findings") or ()),
        )


@dataclass
class PatternStats:
    """Aggregated occurrence history of one pattern signature."""
    count: int
    severity: Severity
    first_seen: str
    examples: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "severity": self.severity.value,
            "first_seen": self.first_seen,
            "examples": list(self.examples),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PatternStats:
        return cls(
            count=int(data.get("count", 0)),
            severity=Severity.parse(data.get("severity"), Severity.LOW),  # type: ignore[arg-type]
            first_seen=str(data.get("first_seen", "")),
            examples=list(data.get("examples") or []),
        )


@dataclass(frozen=True)
class KnowledgeBaseStats:
    total_analyses: int
    total_vulnerabilities: int
    unique_patterns: int
    verified_exploits: int
    last_updated: str | None


@dataclass(frozen=True)
class KnowledgeBaseSnapshot:
    """Statistics plus learned patterns ordered by descending occurrence count."""
    stats: KnowledgeBaseStats
    patterns: tuple[tuple[str, PatternStats], ...]


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of the analyze pipeline handed back to the caller."""
    record: AnalysisRecord
    findings: tuple[Finding, ...]
    report_path: str
    include_examples: bool
