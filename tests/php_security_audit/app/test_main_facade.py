"""Facade function tests for main module."""
from pathlib import Path

import pytest

import php_security_audit
from php_security_audit.app.main import analyze, knowledge_base, recent_analyses
from php_security_audit.core.domain.exceptions import InvalidInputError
from php_security_audit.core.domain.models import Severity

from tests.php_security_audit.app.conftest import VULNERABLE_PHP


def test_package_exports_facade():
    assert php_security_audit.analyze is analyze
    assert php_security_audit.knowledge_base is knowledge_base
    assert php_security_audit.recent_analyses is recent_analyses


def test_analyze_records_and_reports(test_config, tmp_path):
    outcome = analyze(VULNERABLE_PHP, config=test_config)

    assert outcome.record.vulnerabilities_found == len(outcome.findings) > 0
    assert Path(outcome.report_path).parent == tmp_path / "analysis"
    assert Path(outcome.report_path).exists()
    assert len(list((tmp_path / "logs").glob("*.json"))) == 1
    assert (tmp_path / "knowledge" / "knowledge_base.json").exists()


def test_analyze_filters_by_severity(test_config):
    outcome = analyze(VULNERABLE_PHP, severity_filter="critical", config=test_config)

    assert outcome.findings
    assert all(f.severity is Severity.CRITICAL for f in outcome.findings)


def test_analyze_empty_code_raises(test_config):
    with pytest.raises(InvalidInputError):
        analyze("", config=test_config)


def test_knowledge_base_accumulates_across_calls(test_config):
    analyze(VULNERABLE_PHP, config=test_config)
    analyze("echo $x;", vulnerability_types=["xss"], config=test_config)

    snapshot = knowledge_base(config=test_config)

    assert snapshot.stats.total_analyses == 2
    counts = [p.count for _, p in snapshot.patterns]
    assert counts == sorted(counts, reverse=True)
    assert counts[0] == 2


def test_recent_analyses_newest_first(test_config):
    first = analyze("echo $a;", config=test_config)
    second = analyze("echo $b;", config=test_config)

    records = recent_analyses(config=test_config)

    assert [r.id for r in records][:2] == [second.record.id, first.record.id]
    assert recent_analyses(0, config=test_config) == []
    assert len(recent_analyses(1, config=test_config)) == 1


def test_analyze_single_category_string(test_config):
    outcome = analyze("echo $_GET['msg'];", vulnerability_types="xss", severity_filter="low", config=test_config)

    assert len(outcome.findings) == 1
    assert outcome.findings[0].category.value == "xss"
