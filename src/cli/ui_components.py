"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `ask` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ChannelQueryResult, QueryResult
from core.services.formatter import format_ratio, format_sats
from core.services.summary import local_ratio


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se desactiva en modos no interactivos (JSON).
    """

    title = Text("ln-channel-query", style="bold yellow")
    subtitle = Text("Lightning channels • Health • Liquidity", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="yellow", padding=(1, 4)))


def build_channels_table(data: ChannelQueryResult) -> Table:
    """Tabla Rich con un canal por fila."""

    table = Table(title="Channels")
    table.add_column("Peer", style="cyan", no_wrap=True)
    table.add_column("Capacity", style="white", justify="right")
    table.add_column("Local", style="green", justify="right")
    table.add_column("Remote", style="magenta", justify="right")
    table.add_column("Local %", justify="right")
    table.add_column("Active")
    table.add_column("Error", style="red")

    for channel in data.channels:
        table.add_row(
            channel.remote_alias,
            format_sats(channel.capacity),
            format_sats(channel.local_balance),
            format_sats(channel.remote_balance),
            format_ratio(local_ratio(channel)),
            "yes" if channel.active else "no",
            channel.error.message if channel.error else "",
        )
    return table


def build_answer_panel(result: QueryResult) -> Panel:
    """Panel con la respuesta en texto (o el error saneado)."""

    if not result.ok:
        return Panel(Text(result.text), title=Text("Error", style="bold red"), border_style="red")
    if result.type == "unknown":
        return Panel(Text(result.text), title=Text("?", style="bold yellow"), border_style="yellow")
    title = Text(result.type.replace("_", " ").title(), style="bold green")
    return Panel(Text(result.text), title=title, border_style="green")
