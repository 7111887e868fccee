from __future__ import annotations

from ..domain.exceptions import InvalidInputError
from ..domain.models import AnalysisRecord
from ..ports import AnalysisLogPort


class RecentAnalysesUseCase:
    def __init__(self, *, analysis_log: AnalysisLogPort, default_limit: int = 10) -> None:
        self._analysis_log = analysis_log
        self._default_limit = default_limit

    def execute(self, limit: int | float | None = None) -> list[AnalysisRecord]:
        """Return the newest analyses first.

        Raises:
            InvalidInputError: If `limit` is not a number
        """
        if limit is None:
            limit = self._default_limit
        if isinstance(limit, bool) or not isinstance(limit, (int, float)):
            raise InvalidInputError(f"limit must be a number, got {limit!r}")
        return self._analysis_log.recent(int(limit))
