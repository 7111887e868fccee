import asyncio

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from php_security_audit.core.services import AnalysisOrchestrator, DetectionEngine
from php_security_audit.core.usecases.analyze import AnalyzeUseCase
from php_security_audit.core.usecases.knowledge import KnowledgeBaseUseCase
from php_security_audit.core.usecases.protocol import ProtocolUseCase
from php_security_audit.core.usecases.recent import RecentAnalysesUseCase
from php_security_audit.infra.analysis_log import AnalysisLog
from php_security_audit.infra.knowledge_base import KnowledgeBaseStore
from php_security_audit.infra.mcp_server import MCPServer, to_tool_error
from php_security_audit.infra.report_store import ReportStore
from php_security_audit.infra.resources import DEFAULT_PROMPTS_DIR, PromptCatalog, ProtocolSource
from php_security_audit.core.domain.exceptions import InvalidInputError, StorageError

from tests.php_security_audit.core.usecases.conftest import FakeClock, FakeIdGen, FakeLogger, FakeProtocolSource


class ExplodingKnowledgeBase:
    def aggregate(self, findings):
        raise RuntimeError("disk on fire")

    def statistics(self):
        raise RuntimeError("disk on fire")

    def learned_patterns(self):
        raise RuntimeError("disk on fire")


def _server(tmp_path, *, knowledge_base=None, protocol_source=None, logger=None):
    logger = logger or FakeLogger()
    kb = knowledge_base or KnowledgeBaseStore(path=tmp_path / "knowledge" / "knowledge_base.json")
    log = AnalysisLog(logs_dir=tmp_path / "logs")
    orchestrator = AnalysisOrchestrator(
        engine=DetectionEngine(),
        analysis_log=log,
        report_store=ReportStore(analysis_dir=tmp_path / "analysis"),
        knowledge_base=kb,
        id_gen=FakeIdGen(),
        clock=FakeClock(),
        logger=logger,
    )
    return MCPServer(
        name="php-security-audit-mcp",
        instructions="test",
        analyze_uc=AnalyzeUseCase(orchestrator=orchestrator),
        knowledge_uc=KnowledgeBaseUseCase(knowledge_base=kb),
        recent_uc=RecentAnalysesUseCase(analysis_log=log),
        protocol_uc=ProtocolUseCase(source=protocol_source or FakeProtocolSource("# Audit Protocol")),
        prompts=PromptCatalog(prompts_dir=DEFAULT_PROMPTS_DIR),
        logger=logger,
    )


def _call(app, tool: str, args: dict | None = None) -> str:
    async def go():
        async with Client(app) as client:
            result = await client.call_tool(tool, args or {})
            return result.content[0].text

    return asyncio.run(go())


def test_to_tool_error_messages():
    assert str(to_tool_error(InvalidInputError("No code provided"))) == "InvalidParams (-32602): No code provided"
    assert str(to_tool_error(StorageError("/kb", "Failed"))) == "InternalError (-32603): Failed: /kb"
    assert str(to_tool_error(ValueError("boom"))) == "InternalError (-32603): Analysis failed: boom"


def test_lists_tools_and_prompts(tmp_path):
    app = _server(tmp_path).build()

    async def go():
        async with Client(app) as client:
            tools = await client.list_tools()
            prompts = await client.list_prompts()
            return tools, prompts

    tools, prompts = asyncio.run(go())

    assert {t.name for t in tools} == {
        "analyze_php_security", "get_knowledge_base", "get_recent_analyses", "get_protocol",
    }
    by_name = {p.name: p for p in prompts}
    assert set(by_name) == {"dos", "sql-injection", "xss"}
    assert by_name["sql-injection"].description == "Real vulnerability patterns for sql injection"


def test_get_prompt_returns_file_content(tmp_path):
    app = _server(tmp_path).build()

    async def go():
        async with Client(app) as client:
            return await client.get_prompt("xss")

    result = asyncio.run(go())

    text = result.messages[0].content.text
    assert text == (DEFAULT_PROMPTS_DIR / "xss.md").read_text(encoding="utf-8")


def test_analyze_tool_reports_findings(tmp_path):
    app = _server(tmp_path).build()

    text = _call(app, "analyze_php_security", {
        "code": "echo $_GET['msg'];",
        "vulnerability_types": ["xss"],
        "severity_filter": "low",
    })

    assert "Unescaped Output" in text
    assert "`analysis_0001`" in text
    assert "_report.html" in text
    assert len(list((tmp_path / "logs").glob("*.json"))) == 1
    assert len(list((tmp_path / "analysis").glob("*_report.html"))) == 1


def test_analyze_tool_clean_code(tmp_path):
    app = _server(tmp_path).build()

    text = _call(app, "analyze_php_security", {"code": "<?php\n$a = 1;\n"})

    assert "No vulnerabilities detected" in text


def test_analyze_tool_rejects_empty_code(tmp_path):
    logger = FakeLogger()
    app = _server(tmp_path, logger=logger).build()

    with pytest.raises(ToolError, match=r"InvalidParams \(-32602\): No code provided"):
        _call(app, "analyze_php_security", {"code": "   "})

    assert "tool_rejected" in logger.messages("warning")


def test_unexpected_error_is_internal_and_server_keeps_serving(tmp_path):
    logger = FakeLogger()
    app = _server(tmp_path, knowledge_base=ExplodingKnowledgeBase(), logger=logger).build()

    with pytest.raises(ToolError, match=r"InternalError \(-32603\): Analysis failed: disk on fire"):
        _call(app, "analyze_php_security", {"code": "echo $x;"})

    assert "analysis_failed" in logger.messages("exception")
    assert "Audit Protocol" in _call(app, "get_protocol")


def test_knowledge_and_recent_tools_follow_analyses(tmp_path):
    app = _server(tmp_path).build()

    assert "No analyses found." in _call(app, "get_recent_analyses")

    _call(app, "analyze_php_security", {"code": "echo $_GET['msg'];", "severity_filter": "low"})
    _call(app, "analyze_php_security", {"code": "$db->where('id', 1, $op);", "severity_filter": "low"})

    kb_text = _call(app, "get_knowledge_base")
    assert "**Total Analyses**: 2" in kb_text
    assert "operator injection" in kb_text

    recent_text = _call(app, "get_recent_analyses", {"limit": 1})
    assert "`analysis_0002`" in recent_text
    assert "`analysis_0001`" not in recent_text


def test_recent_tool_truncates_fractional_limit(tmp_path):
    app = _server(tmp_path).build()
    for _ in range(3):
        _call(app, "analyze_php_security", {"code": "echo $_GET['msg'];", "severity_filter": "low"})

    recent_text = _call(app, "get_recent_analyses", {"limit": 2.5})

    assert "`analysis_0003`" in recent_text
    assert "`analysis_0002`" in recent_text
    assert "`analysis_0001`" not in recent_text


def test_missing_protocol_is_internal_error(tmp_path):
    app = _server(tmp_path, protocol_source=ProtocolSource(path=tmp_path / "missing.md")).build()

    with pytest.raises(ToolError, match=r"InternalError \(-32603\): Protocol not found"):
        _call(app, "get_protocol")
