from __future__ import annotations

from typing import Sequence

from ..domain.models import AnalysisOutcome
from ..services import AnalysisOrchestrator

DEFAULT_VULNERABILITY_TYPES: tuple[str, ...] = ("sql_injection", "xss", "dos")
DEFAULT_SEVERITY_FILTER = "medium"


class AnalyzeUseCase:
    """Use case for analyzing PHP source.

    Thin layer that applies argument defaults and delegates to AnalysisOrchestrator.
    """

    def __init__(
        self,
        *,
        orchestrator: AnalysisOrchestrator,
        default_vulnerability_types: Sequence[str] = DEFAULT_VULNERABILITY_TYPES,
        default_severity_filter: str = DEFAULT_SEVERITY_FILTER,
        default_test_mode: bool = True,
    ) -> None:
        self._orchestrator = orchestrator
        self._default_types = tuple(default_vulnerability_types)
        self._default_severity = default_severity_filter
        self._default_test_mode = default_test_mode

    def execute(
        self,
        *,
        code: str,
        vulnerability_types: Sequence[str] | str | None = None,
        severity_filter: str | None = None,
        test_mode: bool | None = None,
    ) -> AnalysisOutcome:
        """Execute analysis workflow.

        Omitted arguments take the configured defaults. A single category name
        is accepted in place of a sequence.
        """
        if vulnerability_types is None:
            types = self._default_types
        elif isinstance(vulnerability_types, str):
            # also covers a single Category member
            types = (vulnerability_types,)
        else:
            types = tuple(vulnerability_types)
        return self._orchestrator.analyze(
            code=code,
            vulnerability_types=types,
            severity_filter=severity_filter if severity_filter is not None else self._default_severity,
            test_mode=test_mode if test_mode is not None else self._default_test_mode,
        )
