"""Domain exceptions for php_security_audit.

Every exception carries a stable JSON-RPC error code so the MCP layer can
report it in-band without guessing.
"""

from __future__ import annotations

INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class AuditError(Exception):
    """Base class for failures raised by the analysis core."""

    code: int = INTERNAL_ERROR
    label: str = "InternalError"


class InvalidInputError(AuditError):
    """Raised when tool arguments are missing or unusable (e.g. empty code)."""

    code = INVALID_PARAMS
    label = "InvalidParams"


class StorageError(AuditError):
    """Raised when the knowledge base, analysis log or report store cannot be read or written."""

    def __init__(self, path: object, message: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")
