from __future__ import annotations

import logging
from typing import Callable, TypeVar

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware.logging import LoggingMiddleware

from ..core.domain.exceptions import INTERNAL_ERROR, AuditError
from ..core.ports import LoggerPort
from ..core.usecases.analyze import AnalyzeUseCase
from ..core.usecases.knowledge import KnowledgeBaseUseCase
from ..core.usecases.protocol import ProtocolUseCase
from ..core.usecases.recent import RecentAnalysesUseCase
from .markdown_report import (
    format_analysis_report,
    format_knowledge_base,
    format_recent_analyses,
)
from .mcp.wiretap_logging import WiretapLoggingMiddleware
from .resources import PromptCatalog, PromptEntry

debug_logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_tool_error(exc: Exception) -> ToolError:
    """Map an exception to the error text clients see.

    Domain errors keep their JSON-RPC code; anything else is an internal error.
    """
    if isinstance(exc, AuditError):
        return ToolError(f"{exc.label} ({exc.code}): {exc}")
    return ToolError(f"InternalError ({INTERNAL_ERROR}): Analysis failed: {exc}")


class MCPServer:
    """Exposes the audit use cases as MCP tools and the prompt files as MCP prompts."""

    def __init__(
        self,
        *,
        name: str,
        instructions: str,
        analyze_uc: AnalyzeUseCase,
        knowledge_uc: KnowledgeBaseUseCase,
        recent_uc: RecentAnalysesUseCase,
        protocol_uc: ProtocolUseCase,
        prompts: PromptCatalog,
        logger: LoggerPort,
    ) -> None:
        self._name = name
        self._instructions = instructions
        self._analyze_uc = analyze_uc
        self._knowledge_uc = knowledge_uc
        self._recent_uc = recent_uc
        self._protocol_uc = protocol_uc
        self._prompts = prompts
        self._logger = logger

    def build(self) -> FastMCP:
        app = FastMCP(name=self._name, instructions=self._instructions)
        app.add_middleware(LoggingMiddleware())
        app.add_middleware(WiretapLoggingMiddleware())

        self._register_tools(app)
        registered = self._register_prompts(app)

        debug_logger.debug(f"Registered prompts: {registered}")
        return app

    def run(self) -> None:
        """Serve over stdio until the client closes stdin."""
        app = self.build()
        self._logger.info(
            "server_started",
            type="server_started",
            name=self._name,
            transport="stdio",
        )
        app.run(transport="stdio", show_banner=False)

    def _invoke(self, tool: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except AuditError as e:
            self._logger.warning(
                "tool_rejected",
                type="tool_rejected",
                tool=tool,
                code=e.code,
                error=str(e),
            )
            raise to_tool_error(e) from e
        except Exception as e:
            self._logger.exception(
                "analysis_failed",
                type="analysis_failed",
                tool=tool,
                error=str(e),
            )
            raise to_tool_error(e) from e

    def _register_tools(self, app: FastMCP) -> None:
        @app.tool(
            name="analyze_php_security",
            description=(
                "Analyze PHP code for security vulnerabilities using protocol-based detection. "
                "Categories: sql_injection, xss, dos. Severity floor: low, medium, high, critical."
            ),
        )
        def analyze_php_security(
            code: str,
            vulnerability_types: list[str] | None = None,
            severity_filter: str | None = None,
            test_mode: bool | None = None,
        ) -> str:
            outcome = self._invoke(
                "analyze_php_security",
                lambda: self._analyze_uc.execute(
                    code=code,
                    vulnerability_types=vulnerability_types,
                    severity_filter=severity_filter,
                    test_mode=test_mode,
                ),
            )
            return format_analysis_report(outcome)

        @app.tool(
            name="get_knowledge_base",
            description="Retrieve accumulated vulnerability patterns and statistics",
        )
        def get_knowledge_base() -> str:
            snapshot = self._invoke("get_knowledge_base", self._knowledge_uc.execute)
            return format_knowledge_base(snapshot)

        @app.tool(
            name="get_recent_analyses",
            description="Get recent security analysis results",
        )
        def get_recent_analyses(limit: float | None = None) -> str:
            records = self._invoke("get_recent_analyses", lambda: self._recent_uc.execute(limit))
            return format_recent_analyses(records)

        @app.tool(
            name="get_protocol",
            description="Return the security audit protocol the detection rules are derived from",
        )
        def get_protocol() -> str:
            return self._invoke("get_protocol", self._protocol_uc.execute)

    def _register_prompts(self, app: FastMCP) -> list[str]:
        names: list[str] = []
        for entry in self._prompts.entries():
            app.prompt(name=entry.name, description=entry.description)(_prompt_reader(entry))
            names.append(entry.name)
        return names


def _prompt_reader(entry: PromptEntry) -> Callable[[], str]:
    # one closure per entry; a loop-local lambda would bind the last file
    def read_prompt() -> str:
        return entry.read()

    return read_prompt
