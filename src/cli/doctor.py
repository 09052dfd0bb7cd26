"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os
import shutil

import typer
from rich.console import Console
from rich.markup import escape

from cli.ui_components import build_checks_table, build_config_panel, print_banner, print_error
from core.config import BootstrapSettings, get_database_dir, load_env_file, load_settings
from core.domain.models import DATABASE_URL_VAR, DIRECT_URL_VAR, DatabaseConfig
from core.domain.provider import classify_database_url
from core.errors import SetupError

_console = Console()


def collect_config(settings: BootstrapSettings) -> DatabaseConfig:
    """Resolve the configuration a `run` would use, without side effects.

    Works on a copy of the environment and never creates the database
    directory.
    """

    env = dict(os.environ)
    load_env_file(settings.env_file_path, env)

    embedded_path = None
    database_url = env.get(DATABASE_URL_VAR)
    if not database_url:
        embedded_path = get_database_dir(settings, env=env) / settings.database_filename
        database_url = f"file:{embedded_path}"

    provider = classify_database_url(database_url)
    direct_url = env.get(DIRECT_URL_VAR) or (database_url if provider.is_networked else None)
    return DatabaseConfig(
        provider=provider,
        database_url=database_url,
        direct_url=direct_url,
        embedded_path=embedded_path,
    )


def run() -> None:
    """Show the resolved database configuration and baseline checks."""

    try:
        settings = load_settings()
    except SetupError as exc:
        print_error(_console, str(exc))
        raise typer.Exit(code=exc.exit_code)
    config = collect_config(settings)

    print_banner(_console)
    _console.print(build_config_panel(config))

    table = build_checks_table("OnlyLabs DB Doctor")

    env_path = settings.env_file_path
    table.add_row(".env file", "OK" if env_path.is_file() else "OPTIONAL", escape(str(env_path)))

    schema_path = settings.schema_file_path
    table.add_row("Schema template", "OK" if schema_path.is_file() else "FAIL", escape(str(schema_path)))

    launcher = settings.orm_command.split()[0]
    found = shutil.which(launcher)
    details = found or f"{launcher} not found on PATH"
    table.add_row("ORM launcher", "OK" if found else "FAIL", escape(details))

    if config.provider.is_networked and config.direct_url == config.database_url:
        masked = escape(config.masked_database_url)
        table.add_row("DIRECT_URL", "DEFAULT", f"mirrors DATABASE_URL ({masked})")

    _console.print(table)
