"""Componentes de UI para CLI (Rich).

Separados de los comandos para reutilizar tablas/paneles entre `doctor`
y los mensajes de error.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import DatabaseConfig


def print_banner(console: Console) -> None:
    title = Text("OnlyLabs DB", style="bold cyan")
    subtitle = Text("Provider detection • Prisma schema • ORM CLI", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def build_config_panel(config: DatabaseConfig) -> Panel:
    """Panel con la configuración resuelta (URLs enmascaradas)."""

    body = Text()
    body.append(f"Mode: {config.provider.label()}\n", style="bold")
    body.append(f"DATABASE_PROVIDER = {config.provider.value}\n")
    body.append(f"DATABASE_URL      = {config.masked_database_url}\n")
    body.append(f"DIRECT_URL        = {config.masked_direct_url}")
    if config.embedded_path is not None:
        body.append(f"\nSQLite file: {config.embedded_path}", style="dim")
    return Panel(body, title=Text("Database", style="bold yellow"), border_style="yellow")


def print_error(console: Console, message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
