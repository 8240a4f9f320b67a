"""CLI principal (Typer).

Comandos:
- `ask`: responde una pregunta sobre los canales del nodo.
- `serve`: expone el pipeline como servidor MCP (stdio).
- `doctor`: diagnósticos de entorno.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.gateways import build_gateway
from adapters.json_exporter import dump_query_result, export_query_result_json
from adapters.logging_sink import StdlibEventLogger, configure_logging
from cli import doctor
from cli.ui_components import build_answer_panel, build_channels_table, print_banner
from core.config import AppSettings
from core.domain.models import ChannelQueryResult, QueryError, QueryResult
from core.errors import ChannelQueryError
from core.sanitize import sanitize_error, sanitize_settings
from core.services.query_handler import QueryHandler

app = typer.Typer(
    no_args_is_help=True,
    help="Ask questions about your Lightning node's channels.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {sanitize_error(str(exc)).message}")
        raise typer.Exit(code=2) from exc


async def _answer(settings: AppSettings, query: str) -> QueryResult:
    try:
        gateway = build_gateway(settings)
    except ChannelQueryError as exc:
        error: QueryError = sanitize_error(exc)
        return QueryResult(
            type="error",
            text=f"Error processing your query: {error.message}",
            data={},
            error=error,
        )

    async with gateway:
        handler = QueryHandler(
            gateway,
            settings.health_criteria(),
            logger=StdlibEventLogger(),
        )
        return await handler.handle_text(query)


@app.command()
def ask(
    query: str = typer.Argument(..., help="Question, e.g. 'how healthy are my channels?'"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw JSON result."),
    export_json: Optional[Path] = typer.Option(None, "--export-json", help="Also write the JSON result to a file."),
    table: bool = typer.Option(False, "--table", help="Show a per-channel table."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Answer a natural-language question about your channels."""

    settings = _load_settings()
    configure_logging(settings.log_level)
    logging.getLogger("ln_channel_query").debug(
        "Configuration loaded", extra={"fields": sanitize_settings(settings.model_dump(mode="json"))}
    )

    result = asyncio.run(_answer(settings, query))

    if export_json:
        path = export_query_result_json(result=result, output_path=export_json)
        if not json_output:
            _console.print(f"[dim]JSON saved to {path}[/dim]")

    if json_output:
        typer.echo(dump_query_result(result))
    else:
        if not no_banner:
            print_banner(_console)
        _console.print(build_answer_panel(result))
        if table and isinstance(result.data, ChannelQueryResult) and result.data.channels:
            _console.print(build_channels_table(result.data))

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def serve() -> None:
    """Run the MCP server over stdio."""

    from adapters.mcp_server import serve as serve_mcp  # noqa: PLC0415

    settings = _load_settings()
    configure_logging(settings.log_level)
    try:
        asyncio.run(serve_mcp(settings))
    except ChannelQueryError as exc:
        _console.print(f"[red]Cannot start MCP server:[/red] {sanitize_error(exc).message}")
        raise typer.Exit(code=2) from exc


def run() -> None:
    app()


if __name__ == "__main__":
    run()
