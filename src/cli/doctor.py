"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.gateways import build_gateway
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.sanitize import sanitize_error

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_node(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_gateway(settings) as gateway:
            channels = await gateway.list_channels()
        return True, f"{len(channels)} channel(s) visible"
    except Exception as exc:
        return False, sanitize_error(exc).message


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="ln-channel-query Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Connection type", "OK", settings.connection_type)
    if settings.connection_type == "lnd-rest":
        table.add_row("LND REST", "OK", f"{settings.lnd_host}:{settings.lnd_rest_port}")
        for label, path in (
            ("TLS cert", settings.lnd_tls_cert_path),
            ("Macaroon", settings.lnd_macaroon_path),
        ):
            if path is None:
                table.add_row(label, "MISSING", "Not configured")
            elif not path.exists():
                table.add_row(label, "FAIL", "File not found")
            else:
                table.add_row(label, "OK", "Present")
    table.add_row(
        "Health range",
        "OK",
        f"{settings.min_local_ratio:.0%} - {settings.max_local_ratio:.0%} local",
    )

    # Connectivity (best-effort)
    ok_node, detail_node = asyncio.run(_check_node(settings))
    table.add_row("Node connectivity", "OK" if ok_node else "FAIL", detail_node)

    _console.print(table)

    if not ok_node and settings.connection_type == "lnd-rest":
        _console.print(
            "\n[yellow]Note:[/yellow] run `ln-query doctor setup-node` or set "
            "LN_QUERY_CONNECTION_TYPE=mock to try the tool without a node."
        )


@app.command(name="setup-node")
def setup_node() -> None:
    """Interactive node setup (stores config in the user config .env)."""

    host = typer.prompt("LND REST host", default="localhost", show_default=True).strip()
    port = typer.prompt("LND REST port", default="8080", show_default=True).strip()
    cert = typer.prompt("Path to tls.cert").strip()
    macaroon = typer.prompt("Path to readonly.macaroon").strip()

    if not port.isdigit() or not 0 < int(port) <= 65535:
        raise typer.BadParameter("port must be between 1 and 65535")
    if not cert or not macaroon:
        raise typer.BadParameter("tls.cert and macaroon paths are required")

    env_path = write_user_env_vars(
        {
            "LN_QUERY_CONNECTION_TYPE": "lnd-rest",
            "LN_QUERY_LND_HOST": host,
            "LN_QUERY_LND_REST_PORT": port,
            "LN_QUERY_LND_TLS_CERT_PATH": cert,
            "LN_QUERY_LND_MACAROON_PATH": macaroon,
        }
    )

    _console.print(f"[green]Saved node config to:[/green] {env_path}")


@app.command(name="config-path")
def config_path() -> None:
    """Print the user-level .env location."""

    _console.print(str(get_user_env_file()))
