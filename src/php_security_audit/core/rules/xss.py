"""Cross-site scripting rules."""

from __future__ import annotations

import re

from ..domain.models import Category, Severity
from .base import PatternRule

UNESCAPED_OUTPUT = PatternRule(
    name="XSS - Unescaped Output",
    category=Category.XSS,
    severity=Severity.HIGH,
    description="User data echoed without htmlspecialchars()",
    signature="unescaped output: echo $variable without escaping",
    example='echo $_GET["msg"]',
    # a variable directly after echo/print/<?= is not wrapped in an escaping call
    pattern=re.compile(r"(?:\b(?:echo|print)\s*\(?|<\?=)\s*\$[A-Za-z_]"),
)

JAVASCRIPT_PROTOCOL = PatternRule(
    name="XSS - JavaScript Protocol",
    category=Category.XSS,
    severity=Severity.CRITICAL,
    description="URL in href not checked for javascript: protocol",
    signature='javascript protocol: <a href="$url"> without protocol validation',
    example='href="javascript:alert(1)"',
    pattern=re.compile(r"href\s*=.*\$[A-Za-z_]", re.IGNORECASE),
    guards=(
        re.compile(r"javascript:", re.IGNORECASE),
        re.compile(r"\^\(?https\??", re.IGNORECASE),
    ),
)

RULES = (
    UNESCAPED_OUTPUT,
    JAVASCRIPT_PROTOCOL,
)
