from __future__ import annotations

from ..domain.exceptions import AuditError
from ..ports import ProtocolSourcePort


class ProtocolUseCase:
    """Returns the audit protocol document the rules are derived from."""

    def __init__(self, *, source: ProtocolSourcePort) -> None:
        self._source = source

    def execute(self) -> str:
        text = self._source.read()
        if text is None:
            raise AuditError("Protocol not found")
        return text
