from php_security_audit.app.container import Container
from php_security_audit.infra.knowledge_base import KnowledgeBaseStore
from php_security_audit.infra.mcp_server import MCPServer


def _container(config) -> Container:
    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


def test_container_wires_stores_under_home(test_config, tmp_path):
    container = _container(test_config)
    try:
        kb = container.knowledge_base()
        assert isinstance(kb, KnowledgeBaseStore)
        assert kb.path == tmp_path / "knowledge" / "knowledge_base.json"
        # one knowledge base per container
        assert container.knowledge_base() is kb
        assert container.analysis_orchestrator()._knowledge_base is kb
    finally:
        container.shutdown_resources()


def test_container_builds_mcp_server(test_config):
    container = _container(test_config)
    try:
        server = container.mcp_server()
        assert isinstance(server, MCPServer)
        assert server.build().name == "php-security-audit-mcp"
    finally:
        container.shutdown_resources()


def test_container_use_case_defaults_from_config(test_config):
    container = _container(test_config)
    try:
        outcome = container.analyze_uc().execute(code="echo $_GET['msg'];")
        assert outcome.record.metadata.severity_filter == "low"
        assert outcome.record.metadata.vulnerability_types == ("sql_injection", "xss", "dos")
    finally:
        container.shutdown_resources()
