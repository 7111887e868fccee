"""Shared fixtures for app-level tests."""
import pytest

from php_security_audit.app.config import (
    AnalysisConfig,
    AppConfig,
    DirectoryConfig,
    LoggingConfig,
)


@pytest.fixture
def test_config(tmp_path):
    """Create test configuration with explicit values."""
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        analysis=AnalysisConfig(default_severity_filter="low"),
        logging=LoggingConfig(console_output=False),
    )


@pytest.fixture
def audit_home(tmp_path, monkeypatch):
    """Point env-loaded configuration at a temporary home."""
    monkeypatch.setenv("PHP_AUDIT_DIRECTORIES__HOME", str(tmp_path))
    monkeypatch.setenv("PHP_AUDIT_LOGGING__CONSOLE_OUTPUT", "false")
    return tmp_path


VULNERABLE_PHP = """<?php
$page = $_GET['page'];
$db->where('status', 1, $_GET['op']);
echo $_GET['msg'];
"""
