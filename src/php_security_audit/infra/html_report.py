"""Standalone HTML rendering of one analysis for archival."""

from __future__ import annotations

from html import escape
from typing import Sequence

from ..core.domain.models import AnalysisRecord, Finding, Severity

SEVERITY_COLORS = {
    Severity.CRITICAL: "#ff6467",
    Severity.HIGH: "#ea580c",
    Severity.MEDIUM: "#ca8a04",
    Severity.LOW: "#737373",
}

_STYLE = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: ui-monospace, monospace; background: #0a0a0a; color: #fafafa;
       min-height: 100vh; padding: 2rem; font-size: 14px; line-height: 1.6; }
.container { max-width: 1200px; margin: 0 auto; background: #191919; border: 1px solid #383838; }
.header { background: #171717; padding: 2rem; border-bottom: 1px solid #383838; }
.header h1 { font-size: 1.5rem; font-weight: 600; letter-spacing: -0.02em; }
.header .timestamp { font-size: 0.75rem; color: #a1a1a1; margin-top: 0.5rem; display: block; }
.stats { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
         gap: 1px; background: #383838; border-bottom: 1px solid #383838; }
.stat-card { background: #262626; padding: 1.5rem; }
.stat-card h3 { font-size: 0.6875rem; text-transform: uppercase; letter-spacing: 0.1em;
                color: #a1a1a1; margin-bottom: 0.75rem; font-weight: 600; }
.stat-card .value { font-size: 1.75rem; font-weight: 700; }
.stat-card .value.small { font-size: 0.875rem; word-break: break-all; }
.content { padding: 2rem; }
.vulnerability { background: #262626; border: 1px solid #383838; padding: 1.5rem; margin-bottom: 1.5rem; }
.vulnerability-title { font-size: 1.125rem; font-weight: 600; margin-bottom: 0.75rem; }
.severity-badge { display: inline-block; padding: 0.375rem 0.75rem; font-size: 0.6875rem;
                  font-weight: 600; text-transform: uppercase; letter-spacing: 0.05em; color: white; }
.vulnerability-description { color: #a1a1a1; margin: 1rem 0; font-size: 0.875rem; }
.pattern { border: 1px solid #383838; border-left: 2px solid #737373; padding: 1rem; margin: 1rem 0; }
.pattern-title { font-weight: 600; margin-bottom: 0.5rem; font-size: 0.875rem; }
.pattern code { color: #a1a1a1; font-size: 0.8125rem; }
.code-block { background: #171717; padding: 1rem; overflow-x: auto; font-size: 0.8125rem;
              margin: 1rem 0; border: 1px solid #383838; white-space: pre-wrap; }
.footer { background: #171717; padding: 1.5rem 2rem; border-top: 1px solid #383838;
          text-align: center; color: #a1a1a1; font-size: 0.75rem; }
.no-vulnerabilities { text-align: center; padding: 4rem 2rem; }
.no-vulnerabilities-text { font-size: 1.25rem; font-weight: 600; margin-bottom: 0.5rem; }
.no-vulnerabilities-subtext { color: #a1a1a1; font-size: 0.875rem; }
"""


def _render_finding(f: Finding) -> str:
    color = SEVERITY_COLORS.get(f.severity, "#737373")
    parts = [
        '<div class="vulnerability">',
        f'<div class="vulnerability-title">{escape(f.name)}</div>',
        f'<span class="severity-badge" style="background: {color};">{f.severity.value.upper()}</span>',
        f'<div class="vulnerability-description">{escape(f.description)}</div>',
        '<div class="pattern">',
        '<div class="pattern-title">PATTERN DETECTED</div>',
        f"<code>{escape(f.pattern_signature)}</code>",
        "</div>",
    ]
    if f.proof_of_concept is not None:
        parts.append('<div class="pattern-title">PROOF OF CONCEPT</div>')
        parts.append(f'<div class="code-block">{escape(f.proof_of_concept)}</div>')
    parts.append("</div>")
    return "\n".join(parts)


def render_html_report(record: AnalysisRecord, findings: Sequence[Finding]) -> str:
    """Render a styled standalone HTML document for one analysis.

    All dynamic text is HTML-escaped.
    """
    if findings:
        body = "\n".join(_render_finding(f) for f in findings)
    else:
        body = (
            '<div class="no-vulnerabilities">'
            '<div class="no-vulnerabilities-text">NO VULNERABILITIES DETECTED</div>'
            '<p class="no-vulnerabilities-subtext">The analyzed code passed all security checks.</p>'
            "</div>"
        )

    timestamp = escape(record.timestamp)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Security Analysis Report - {timestamp}</title>
<style>{_STYLE}</style>
</head>
<body>
<div class="container">
<div class="header">
<h1>SECURITY ANALYSIS REPORT</h1>
<span class="timestamp">{timestamp}</span>
</div>
<div class="stats">
<div class="stat-card"><h3>Vulnerabilities</h3><div class="value">{record.vulnerabilities_found}</div></div>
<div class="stat-card"><h3>Code Size</h3><div class="value">{record.code_length}</div></div>
<div class="stat-card"><h3>Analysis ID</h3><div class="value small">{escape(record.id)}</div></div>
</div>
<div class="content">
{body}
</div>
<div class="footer">Generated by PHP Security Audit MCP Server &middot; Protocol-Based Analysis</div>
</div>
</body>
</html>
"""
