"""Orquestación del bootstrap de base de datos.

Flujo de `run_with_database_env` (estrictamente secuencial, sin reintentos):
cargar `.env` -> configurar entorno -> generar schema -> ejecutar comando.

`run_postinstall` encadena dos invocaciones (cliente + tablas) sobre ese
mismo flujo. Los servicios imprimen progreso en la consola recibida y
lanzan `BootstrapError`; la CLI decide el código de salida.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import MutableMapping

from rich.console import Console
from rich.markup import escape

from adapters.shell_runner import run_shell_command
from core.config import BootstrapSettings, load_env_file
from core.domain.models import DATABASE_URL_VAR, DatabaseConfig
from core.domain.provider import Provider, classify_database_url
from core.errors import ExternalToolError, UsageError
from core.interfaces.runner import CommandRunner
from core.services.env_configurator import configure_database_env
from core.services.schema_generator import generate_schema_file

USAGE = "Usage: onlylabs-db run <prisma command>"
USAGE_EXAMPLE = 'Example: onlylabs-db run "npx prisma generate && npx prisma db push"'


@dataclass
class BootstrapContext:
    """Dependencias de una invocación (entorno, plataforma, salida, runner)."""

    settings: BootstrapSettings
    env: MutableMapping[str, str] = field(default_factory=lambda: os.environ)
    console: Console = field(default_factory=Console)
    runner: CommandRunner = run_shell_command
    platform: str | None = None
    home: Path | None = None


def generate_schema(ctx: BootstrapContext, provider: Provider | None = None) -> str:
    """Genera el schema para `provider` (o el que indique DATABASE_URL)."""

    if provider is None:
        provider = classify_database_url(ctx.env.get(DATABASE_URL_VAR))
    ctx.console.print(f"Generating Prisma schema for {provider.value.upper()}...")
    generated = generate_schema_file(ctx.settings.schema_file_path, provider)
    ctx.console.print("[green]Schema generated successfully[/green]")
    return generated


def prepare_database_env(ctx: BootstrapContext) -> DatabaseConfig:
    """Carga `.env`, configura el entorno y regenera el schema."""

    load_env_file(ctx.settings.env_file_path, ctx.env)
    config = configure_database_env(
        ctx.env,
        settings=ctx.settings,
        platform=ctx.platform,
        home=ctx.home,
    )
    ctx.console.print(
        f"Database Configuration: {config.provider.mode} ({config.provider.value.upper()})"
    )
    generate_schema(ctx, config.provider)
    return config


def run_with_database_env(command: str, ctx: BootstrapContext) -> int:
    """Ejecuta `command` con el entorno de base de datos completo.

    Un `SetupError` en la preparación se propaga y el comando no llega a
    lanzarse. Devuelve el código de salida del proceso hijo.
    """

    if not command or not command.strip():
        raise UsageError(USAGE)

    prepare_database_env(ctx)
    return ctx.runner(command, env=ctx.env)


def _orm(ctx: BootstrapContext, args: str) -> str:
    return f"{ctx.settings.orm_command} {args}"


def _push_tables(ctx: BootstrapContext, provider: Provider) -> None:
    if provider.is_networked:
        # Sin --accept-data-loss: cambios destructivos fallan en vez de borrar datos.
        exit_code = run_with_database_env(_orm(ctx, "db push --skip-generate"), ctx)
        if exit_code == 0:
            ctx.console.print("[green]Database schema updated successfully (cloud)[/green]\n")
            return
        ctx.console.print("\n[yellow]Database schema update failed[/yellow]")
        ctx.console.print("This is normal if:")
        ctx.console.print("   - Database is not accessible yet")
        ctx.console.print("   - Schema changes would cause data loss (safety protection)")
        ctx.console.print("\nThe app will attempt to initialize on first run\n")
        return

    exit_code = run_with_database_env(_orm(ctx, "db push --accept-data-loss --skip-generate"), ctx)
    if exit_code == 0:
        ctx.console.print("[green]Database tables created successfully (local)[/green]\n")
        return
    ctx.console.print("\n[yellow]Failed to create database tables[/yellow]")
    ctx.console.print(f"You can manually create tables by running: {escape(_orm(ctx, 'db push'))}\n")


def run_postinstall(ctx: BootstrapContext) -> None:
    """Genera el cliente del ORM y crea/actualiza tablas.

    - Fallo generando el cliente: `ExternalToolError` (fatal).
    - Fallo creando tablas: aviso y se continúa, en ambos modos.
    """

    load_env_file(ctx.settings.env_file_path, ctx.env)
    provider = classify_database_url(ctx.env.get(DATABASE_URL_VAR))

    ctx.console.print("\nRunning postinstall setup...\n")
    ctx.console.print(f"Mode: {provider.label()}\n")

    ctx.console.print("Generating Prisma client...")
    generate_command = _orm(ctx, "generate")
    exit_code = run_with_database_env(generate_command, ctx)
    if exit_code != 0:
        raise ExternalToolError(generate_command, exit_code)
    ctx.console.print("[green]Prisma client generated[/green]\n")

    ctx.console.print("Setting up database tables...")
    _push_tables(ctx, provider)

    ctx.console.print("[green]Postinstall completed[/green]\n")
