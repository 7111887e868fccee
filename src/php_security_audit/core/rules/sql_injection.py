"""SQL injection rules for query-builder style PHP code."""

from __future__ import annotations

import re

from ..domain.models import Category, Severity
from .base import PatternRule

# Variable with optional array access: $op, $_GET['op'], $req["a"]["b"]
_VAR = r"\$[A-Za-z_]\w*(?:\[[^\]]*\])*"

OPERATOR_INJECTION = PatternRule(
    name="SQL Injection - Operator Injection",
    category=Category.SQL_INJECTION,
    severity=Severity.CRITICAL,
    description="WHERE clause accepts unsanitized operator parameter",
    signature="operator injection: where($column, $value, $operator) without validation",
    example='$db->where("id", 1, "= 1 OR 1=1")',
    # third argument of ->where() is the comparison operator slot
    pattern=re.compile(r"->where\s*\(\s*[^,)]+,\s*[^,)]+,\s*" + _VAR + r"\s*\)"),
    guards=(
        re.compile(
            r"in_array\s*\(\s*" + _VAR + r"\s*,\s*(?:self::|static::)?\$?\w*(?:operator|allowed)\w*",
            re.IGNORECASE,
        ),
        re.compile(r"\bvalidate_?operator\s*\(", re.IGNORECASE),
    ),
)

COLUMN_NAME_INJECTION = PatternRule(
    name="SQL Injection - Column Name Injection",
    category=Category.SQL_INJECTION,
    severity=Severity.CRITICAL,
    description="ORDER BY uses unsanitized column name",
    signature="column injection: ORDER BY $column without sanitization",
    example='$db->orderBy($_GET["sort"])',
    pattern=re.compile(r"ORDER\s+BY\s+(?:['\"]\s*\.\s*)?['\"]?\{?\$[A-Za-z_]", re.IGNORECASE),
)

FIND_IN_SET_VALUE = PatternRule(
    name="SQL Injection - FIND_IN_SET Value",
    category=Category.SQL_INJECTION,
    severity=Severity.HIGH,
    description="FIND_IN_SET value not using prepared statement",
    signature="unbound value: FIND_IN_SET($value, $column) without binding",
    example='$db->findInSet("roles", $_POST["role"])',
    # first argument must be a ? or :name placeholder
    pattern=re.compile(r"FIND_IN_SET\s*\(\s*(?![\s?:])[^,]+,", re.IGNORECASE),
)

RULES = (
    OPERATOR_INJECTION,
    COLUMN_NAME_INJECTION,
    FIND_IN_SET_VALUE,
)
