"""CLI principal (Typer).

Comandos:
- `run`: ejecuta un comando del ORM con el entorno de base de datos listo.
- `generate-schema`: solo reescribe el schema según DATABASE_URL.
- `postinstall`: genera el cliente y crea tablas tras la instalación.
- `doctor`: diagnóstico de la configuración resuelta.
"""

from __future__ import annotations

import sys

import typer
from rich.console import Console
from rich.markup import escape

from cli import doctor
from cli.ui_components import print_error
from core.config import load_env_file, load_settings
from core.errors import BootstrapError, UsageError
from core.services.bootstrap_pipeline import (
    USAGE_EXAMPLE,
    BootstrapContext,
    generate_schema,
    run_postinstall,
    run_with_database_env,
)

app = typer.Typer(
    no_args_is_help=True,
    help="Configure database environment variables and run Prisma CLI commands.",
)
app.command("doctor")(doctor.run)

_console = Console()
_err_console = Console(stderr=True)


def _context() -> BootstrapContext:
    return BootstrapContext(settings=load_settings(), console=_console)


@app.command(
    "run",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run_command(ctx: typer.Context) -> None:
    """Run a command (e.g. "npx prisma generate") with the database env configured."""

    command = " ".join(ctx.args)
    try:
        exit_code = run_with_database_env(command, _context())
    except UsageError as exc:
        _err_console.print(escape(str(exc)))
        _err_console.print(USAGE_EXAMPLE)
        raise typer.Exit(code=exc.exit_code)
    except BootstrapError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=exc.exit_code)
    raise typer.Exit(code=exit_code)


@app.command("generate-schema")
def generate_schema_command() -> None:
    """Rewrite the Prisma schema for the provider implied by DATABASE_URL."""

    try:
        bootstrap = _context()
        load_env_file(bootstrap.settings.env_file_path, bootstrap.env)
        generate_schema(bootstrap)
    except BootstrapError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=exc.exit_code)


@app.command("postinstall")
def postinstall_command() -> None:
    """Generate the Prisma client and create database tables."""

    try:
        run_postinstall(_context())
    except BootstrapError as exc:
        _err_console.print(f"[bold red]Postinstall failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)


def run() -> None:
    # Windows terminals default to cp1252; Rich output needs utf-8.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()
