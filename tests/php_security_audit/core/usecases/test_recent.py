"""Tests for RecentAnalysesUseCase."""
import pytest

from php_security_audit.core.domain.exceptions import InvalidInputError
from php_security_audit.core.usecases.recent import RecentAnalysesUseCase

from tests.php_security_audit.core.usecases.conftest import FakeAnalysisLog


def test_recent_uses_default_limit():
    log = FakeAnalysisLog()

    RecentAnalysesUseCase(analysis_log=log, default_limit=7).execute()

    assert log.recent_calls == [7]


def test_recent_truncates_float_limit():
    log = FakeAnalysisLog()

    RecentAnalysesUseCase(analysis_log=log).execute(3.9)

    assert log.recent_calls == [3]


def test_recent_zero_is_empty():
    assert RecentAnalysesUseCase(analysis_log=FakeAnalysisLog()).execute(0) == []


@pytest.mark.parametrize("limit", ["5", True, [1]])
def test_recent_rejects_non_numeric_limit(limit):
    with pytest.raises(InvalidInputError):
        RecentAnalysesUseCase(analysis_log=FakeAnalysisLog()).execute(limit)
