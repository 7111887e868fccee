from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .handlers import build_json_file_handler, build_human_console_handler

SERVER_LOG_NAME = "server.jsonl"


class AuditLogger(Resource):
    """Structured logger for the audit server.

    Owns the handlers of the package logger, so module-level loggers
    (`logging.getLogger(__name__)`) below it share the same outputs.
    """

    def init(
        self,
        *,
        logs_dir: Path,
        logger_name: str = "php_security_audit",
        console_output: bool = True,
        json_file: bool = True,
        level: str = "INFO",
    ) -> "AuditLogger":
        """Configure handlers.

        Args:
            logs_dir: Directory for the JSONL server log
            logger_name: Logger name
            console_output: Whether to log human-readable lines to stderr
            json_file: Whether to append JSON lines to `<logs_dir>/server.jsonl`
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        log_level = logging._nameToLevel.get(level.upper(), logging.INFO)

        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(log_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers: list[logging.Handler] = []

        if json_file:
            file_handler = build_json_file_handler(logs_dir / SERVER_LOG_NAME, level=log_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=log_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "AuditLogger") -> None:
        """Flush and close all handlers so file descriptors are released."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with optional extra fields."""
        if kwargs:
            self._logger.debug(message, extra=kwargs)
        else:
            self._logger.debug(message)

    def info(self, message: str, **kwargs) -> None:
        """Log info message with optional extra fields."""
        if kwargs:
            self._logger.info(message, extra=kwargs)
        else:
            self._logger.info(message)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with optional extra fields."""
        if kwargs:
            self._logger.warning(message, extra=kwargs)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        """Log error message with optional extra fields and exception info."""
        if kwargs:
            self._logger.error(message, extra=kwargs, exc_info=exc_info)
        else:
            self._logger.error(message, exc_info=exc_info)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback and optional extra fields."""
        if kwargs:
            self._logger.exception(message, extra=kwargs)
        else:
            self._logger.exception(message)
