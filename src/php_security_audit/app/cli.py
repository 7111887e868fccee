from __future__ import annotations

import json
from pathlib import Path

import typer
from dotenv import load_dotenv

from .config import AppConfig
from .container import Container
from .cli_formatter import knowledge_payload, outcome_payload, recent_payload
from ..core.domain.exceptions import AuditError, InvalidInputError
from ..infra.markdown_report import (
    format_analysis_report,
    format_knowledge_base,
    format_recent_analyses,
)

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _create_container() -> Container:
    config = AppConfig()
    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


def _fail(e: AuditError) -> typer.Exit:
    typer.echo(f"Error: {e}", err=True)
    return typer.Exit(code=2 if isinstance(e, InvalidInputError) else 1)


@app.command()
def serve():
    """Run the MCP server on stdio until the client disconnects."""
    container = _create_container()
    try:
        container.mcp_server().run()
    except AuditError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()


@app.command()
def scan(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="PHP file to analyze"),
    types: list[str] | None = typer.Option(None, "--type", "-t", help="Category to scan (sql_injection, xss, dos); repeatable"),
    severity: str | None = typer.Option(None, "--severity", "-s", help="Minimum severity (low, medium, high, critical)"),
    no_poc: bool = typer.Option(False, "--no-poc", help="Omit proof-of-concept payloads"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Analyze a PHP file and record the result in the knowledge base."""
    code = path.read_bytes().decode("utf-8", errors="replace")

    container = _create_container()
    try:
        uc = container.analyze_uc()
        outcome = uc.execute(
            code=code,
            vulnerability_types=types or None,
            severity_filter=severity,
            test_mode=False if no_poc else None,
        )
    except AuditError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps(outcome_payload(outcome), ensure_ascii=False, indent=2))
    else:
        typer.echo(format_analysis_report(outcome))


@app.command()
def knowledge(
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Show knowledge base statistics and learned patterns."""
    container = _create_container()
    try:
        snapshot = container.knowledge_uc().execute()
    except AuditError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps(knowledge_payload(snapshot), ensure_ascii=False, indent=2))
    else:
        typer.echo(format_knowledge_base(snapshot))


@app.command()
def recent(
    limit: int | None = typer.Option(None, "--limit", "-n", help="Number of analyses to show"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Show the most recent analyses, newest first."""
    container = _create_container()
    try:
        records = container.recent_uc().execute(limit)
    except AuditError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps(recent_payload(records), ensure_ascii=False, indent=2))
    else:
        typer.echo(format_recent_analyses(records))


if __name__ == "__main__":
    app()
