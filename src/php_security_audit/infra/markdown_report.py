"""Markdown rendering of tool results returned over MCP and printed by the CLI."""

from __future__ import annotations

from typing import Sequence

from ..core.domain.models import (
    AnalysisOutcome,
    AnalysisRecord,
    Finding,
    KnowledgeBaseSnapshot,
    Severity,
)

SEVERITY_ICONS = {
    Severity.CRITICAL: "🔴",
    Severity.HIGH: "🟠",
    Severity.MEDIUM: "🟡",
    Severity.LOW: "🔵",
}

NO_FINDINGS_TEXT = "No vulnerabilities detected matching the specified criteria."


def format_findings(findings: Sequence[Finding], include_examples: bool) -> str:
    """Render findings as numbered markdown sections, in the given order."""
    if not findings:
        return (
            "🛡️ **SECURITY ANALYSIS COMPLETE**\n\n"
            f"✅ {NO_FINDINGS_TEXT}\n\n"
            "Note: This is static analysis. Dynamic testing and penetration testing are recommended."
        )

    lines = [
        "🛡️ **SECURITY ANALYSIS RESULTS**",
        "",
        f"⚠️ Found {len(findings)} potential vulnerabilities:",
        "",
        "---",
        "",
    ]
    for i, f in enumerate(findings, 1):
        icon = SEVERITY_ICONS.get(f.severity, "⚪")
        lines.append(f"## {i}. {icon} {f.name}")
        lines.append("")
        lines.append(f"**Severity**: {f.severity.value.upper()}")
        lines.append("")
        lines.append(f"**Description**: {f.description}")
        lines.append("")
        lines.append(f"**Pattern**: `{f.pattern_signature}`")
        lines.append("")
        if include_examples and f.proof_of_concept is not None:
            lines.append("**Proof of Concept**:")
            lines.append("```php")
            lines.append(f.proof_of_concept)
            lines.append("```")
            lines.append("")
        lines.append("---")
        lines.append("")

    lines.append("**Recommendation**: Review each finding and apply fixes according to the audit protocol (`get_protocol`).")
    return "\n".join(lines)


def format_analysis_report(outcome: AnalysisOutcome) -> str:
    """Findings report followed by the analysis id and archived report path."""
    return "\n".join([
        format_findings(outcome.findings, outcome.include_examples),
        "",
        "---",
        "",
        f"📊 **Analysis ID**: `{outcome.record.id}`",
        f"📁 **HTML Report**: `{outcome.report_path}`",
    ])


def format_knowledge_base(snapshot: KnowledgeBaseSnapshot) -> str:
    stats = snapshot.stats
    lines = [
        "📚 **KNOWLEDGE BASE**",
        "",
        "## Statistics",
        "",
        f"- **Total Analyses**: {stats.total_analyses}",
        f"- **Total Vulnerabilities Found**: {stats.total_vulnerabilities}",
        f"- **Unique Patterns**: {stats.unique_patterns}",
        f"- **Verified Exploits**: {stats.verified_exploits}",
        f"- **Last Updated**: {stats.last_updated or 'never'}",
        "",
    ]
    if snapshot.patterns:
        lines.append("## Learned Patterns")
        lines.append("")
        for signature, p in snapshot.patterns:
            lines.append(f"### `{signature}`")
            lines.append(f"- **Occurrences**: {p.count}")
            lines.append(f"- **Severity**: {p.severity.value.upper()}")
            lines.append(f"- **First Seen**: {p.first_seen}")
            lines.append("")
    return "\n".join(lines)


def format_recent_analyses(records: Sequence[AnalysisRecord]) -> str:
    lines = ["📊 **RECENT ANALYSES**", ""]
    if not records:
        lines.append("No analyses found.")
        return "\n".join(lines)

    for r in records:
        b = r.severity_breakdown
        lines.append(f"### Analysis: `{r.id}`")
        lines.append(f"- **Timestamp**: {r.timestamp}")
        lines.append(f"- **Vulnerabilities**: {r.vulnerabilities_found}")
        lines.append(
            "- **Severity Breakdown**: "
            f"Critical: {b.get('critical', 0)}, "
            f"High: {b.get('high', 0)}, "
            f"Medium: {b.get('medium', 0)}, "
            f"Low: {b.get('low', 0)}"
        )
        lines.append(f"- **Code Size**: {r.code_length} bytes")
        lines.append("")
    return "\n".join(lines)
