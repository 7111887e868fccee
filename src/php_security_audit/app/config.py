from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..infra.resources import DEFAULT_PROMPTS_DIR, DEFAULT_PROTOCOL_FILE


APP_NAME = "php_security_audit"

DEFAULT_INSTRUCTIONS = (
    "Protocol-based PHP security auditor. Use analyze_php_security to scan PHP "
    "source for SQL injection, XSS and DoS patterns; get_knowledge_base and "
    "get_recent_analyses to review what earlier analyses learned."
)


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_data_dir)


class DirectoryConfig(BaseSettings):
    """Directory configuration with computed paths."""

    model_config = SettingsConfigDict(env_prefix="PHP_AUDIT_DIRECTORIES__")

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all persisted audit data",
    )

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Per-analysis JSON records and the server log."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def analysis_dir(self) -> Path:
        """Archived HTML reports."""
        path = self.home / "analysis"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def knowledge_dir(self) -> Path:
        path = self.home / "knowledge"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def knowledge_base_file(self) -> Path:
        return self.knowledge_dir / "knowledge_base.json"


class AnalysisConfig(BaseSettings):
    """Defaults applied when a caller omits an analysis argument."""

    model_config = SettingsConfigDict(env_prefix="PHP_AUDIT_ANALYSIS__")

    default_vulnerability_types: list[str] = Field(
        default_factory=lambda: ["sql_injection", "xss", "dos"],
        description="Categories scanned when none are requested",
    )

    default_severity_filter: str = Field(
        default="medium",
        description="Minimum severity kept when none is requested (low, medium, high, critical)",
    )

    default_test_mode: bool = Field(
        default=True,
        description="Attach proof-of-concept payloads to findings",
    )

    recent_limit: int = Field(
        default=10,
        description="Number of records returned by recent-analysis queries",
    )


class ServerConfig(BaseSettings):
    """MCP server identity and bundled documents."""

    model_config = SettingsConfigDict(env_prefix="PHP_AUDIT_SERVER__")

    name: str = Field(default="php-security-audit-mcp")

    instructions: str = Field(default=DEFAULT_INSTRUCTIONS)

    prompts_dir: Path = Field(
        default=DEFAULT_PROMPTS_DIR,
        description="Directory whose *.md files are served as prompts",
    )

    protocol_file: Path = Field(
        default=DEFAULT_PROTOCOL_FILE,
        description="Audit protocol document returned by get_protocol",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="PHP_AUDIT_LOGGING__")

    logger_name: str = Field(default=APP_NAME)

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    console_output: bool = Field(
        default=True,
        description="Human-readable log lines on stderr",
    )

    json_file: bool = Field(
        default=True,
        description="Append JSON lines to <logs_dir>/server.jsonl",
    )


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with PHP_AUDIT_ prefix.
    Use double underscore for nested config: PHP_AUDIT_DIRECTORIES__HOME

    Example env vars:
        export PHP_AUDIT_DIRECTORIES__HOME=/custom/path
        export PHP_AUDIT_ANALYSIS__DEFAULT_SEVERITY_FILTER=high
        export PHP_AUDIT_ANALYSIS__DEFAULT_VULNERABILITY_TYPES='["xss"]'
        export PHP_AUDIT_LOGGING__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="PHP_AUDIT_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
