"""Denial-of-service rules."""

from __future__ import annotations

import re

from ..domain.models import Category, Severity
from .base import PatternRule

SQL_TIME_FUNCTIONS = PatternRule(
    name="DoS - SQL Time Functions",
    category=Category.DOS,
    severity=Severity.CRITICAL,
    description="SLEEP or BENCHMARK functions not blocked",
    signature="time functions: SELECT SLEEP(30) possible",
    example='$db->select("SLEEP(10)")',
    pattern=re.compile(r"\b(?:SLEEP|BENCHMARK)\b", re.IGNORECASE),
    # code that already detects these functions mentions them inside preg_match
    guards=(re.compile(r"preg_match.*(?:SLEEP|BENCHMARK)", re.IGNORECASE),),
)

UNBOUNDED_PAGINATION = PatternRule(
    name="DoS - Unbounded Pagination",
    category=Category.DOS,
    severity=Severity.HIGH,
    description="Pagination page number not bounded",
    signature='unbounded pagination: $_GET["page"] without upper limit',
    example="?page=999999999",
    pattern=re.compile(r"\$_(?:GET|REQUEST)\[\s*['\"]page['\"]\s*\]"),
    guards=(
        re.compile(r"if\s*\(\s*\$page\s*>"),
        re.compile(r"\bmin\s*\([^;]*(?:\$page\b|['\"]page['\"])"),
    ),
)

RULES = (
    SQL_TIME_FUNCTIONS,
    UNBOUNDED_PAGINATION,
)
