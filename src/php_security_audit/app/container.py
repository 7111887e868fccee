from __future__ import annotations

from dependency_injector import containers, providers

from .config import AppConfig
from ..core.ports import DefaultIdGenerator, SystemClock
from ..core.rules import DEFAULT_RULE_SET
from ..core.services import DetectionEngine, AnalysisOrchestrator
from ..core.usecases.analyze import AnalyzeUseCase
from ..core.usecases.knowledge import KnowledgeBaseUseCase
from ..core.usecases.protocol import ProtocolUseCase
from ..core.usecases.recent import RecentAnalysesUseCase
from ..infra.analysis_log import AnalysisLog
from ..infra.knowledge_base import KnowledgeBaseStore
from ..infra.logging import AuditLogger
from ..infra.mcp_server import MCPServer
from ..infra.report_store import ReportStore
from ..infra.resources import PromptCatalog, ProtocolSource


class Container(containers.DeclarativeContainer):
    """DI container with Pydantic BaseSettings support."""

    # Configuration - supports Pydantic models
    config = providers.Configuration(pydantic_settings=[AppConfig()])

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        AuditLogger,
        logs_dir=config.directories.logs_dir,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        json_file=config.logging.json_file,
        level=config.logging.level,
    )

    clock = providers.Singleton(SystemClock)

    id_gen = providers.Singleton(DefaultIdGenerator)

    # Stores (one knowledge base per process, loaded on first use)
    knowledge_base = providers.Singleton(
        KnowledgeBaseStore,
        path=config.directories.knowledge_base_file,
        clock=clock,
    )

    analysis_log = providers.Singleton(
        AnalysisLog,
        logs_dir=config.directories.logs_dir,
    )

    report_store = providers.Singleton(
        ReportStore,
        analysis_dir=config.directories.analysis_dir,
    )

    protocol_source = providers.Singleton(
        ProtocolSource,
        path=config.server.protocol_file,
    )

    prompt_catalog = providers.Singleton(
        PromptCatalog,
        prompts_dir=config.server.prompts_dir,
    )

    # Domain services
    detection_engine = providers.Singleton(
        DetectionEngine,
        rule_set=DEFAULT_RULE_SET,
    )

    analysis_orchestrator = providers.Factory(
        AnalysisOrchestrator,
        engine=detection_engine,
        analysis_log=analysis_log,
        report_store=report_store,
        knowledge_base=knowledge_base,
        id_gen=id_gen,
        clock=clock,
        logger=logger,
    )

    # Use cases
    analyze_uc = providers.Factory(
        AnalyzeUseCase,
        orchestrator=analysis_orchestrator,
        default_vulnerability_types=config.analysis.default_vulnerability_types,
        default_severity_filter=config.analysis.default_severity_filter,
        default_test_mode=config.analysis.default_test_mode,
    )

    knowledge_uc = providers.Factory(
        KnowledgeBaseUseCase,
        knowledge_base=knowledge_base,
    )

    recent_uc = providers.Factory(
        RecentAnalysesUseCase,
        analysis_log=analysis_log,
        default_limit=config.analysis.recent_limit,
    )

    protocol_uc = providers.Factory(
        ProtocolUseCase,
        source=protocol_source,
    )

    # MCP Server
    mcp_server = providers.Factory(
        MCPServer,
        name=config.server.name,
        instructions=config.server.instructions,
        analyze_uc=analyze_uc,
        knowledge_uc=knowledge_uc,
        recent_uc=recent_uc,
        protocol_uc=protocol_uc,
        prompts=prompt_catalog,
        logger=logger,
    )
