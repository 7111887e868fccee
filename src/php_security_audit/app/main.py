from __future__ import annotations

from typing import Sequence

from .config import AppConfig
from .container import Container
from ..core.domain.models import AnalysisOutcome, AnalysisRecord, KnowledgeBaseSnapshot


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def analyze(
    code: str,
    *,
    vulnerability_types: Sequence[str] | str | None = None,
    severity_filter: str | None = None,
    test_mode: bool | None = None,
    config: AppConfig | None = None,
) -> AnalysisOutcome:
    """Analyze PHP source and record the result.

    Args:
        code: PHP source text
        vulnerability_types: Categories to scan, or a single category name (None = configured defaults)
        severity_filter: Minimum severity kept (None = configured default)
        test_mode: Attach proof-of-concept payloads (None = configured default)
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        AnalysisOutcome with the stored record, kept findings and HTML report path

    Raises:
        InvalidInputError: If `code` is empty
        StorageError: If the record, report or knowledge base cannot be written
    """
    container = _create_container(config)
    try:
        uc = container.analyze_uc()
        return uc.execute(
            code=code,
            vulnerability_types=vulnerability_types,
            severity_filter=severity_filter,
            test_mode=test_mode,
        )
    finally:
        container.shutdown_resources()


def knowledge_base(config: AppConfig | None = None) -> KnowledgeBaseSnapshot:
    """Return knowledge base statistics and patterns by descending count."""
    container = _create_container(config)
    try:
        return container.knowledge_uc().execute()
    finally:
        container.shutdown_resources()


def recent_analyses(
    limit: int | None = None,
    config: AppConfig | None = None,
) -> list[AnalysisRecord]:
    """Return up to `limit` analysis records, newest first.

    Args:
        limit: Maximum records (None = configured recent_limit)
        config: Optional config for testing. If None, loads from env vars.
    """
    container = _create_container(config)
    try:
        return container.recent_uc().execute(limit)
    finally:
        container.shutdown_resources()
