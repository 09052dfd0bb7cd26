"""Configuración del bootstrap.

Dos piezas distintas conviven aquí:
- `BootstrapSettings` (pydantic-settings): parámetros propios de la
  herramienta, con prefijo `ONLYLABS_`.
- El cargador de `.env` del proyecto: aplica variables al entorno del
  proceso sin pisar las que ya existen (el entorno real manda).

También resuelve el directorio de datos por plataforma donde vive la base
SQLite local.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, MutableMapping

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import DirectoryCreateError, SetupError

DEFAULT_APP_NAME = "OnlyLabs"


class BootstrapSettings(BaseSettings):
    """Parámetros de la herramienta (no del despliegue).

    El `.env` del proyecto no se lee aquí: lo aplica `load_env_file` con
    semántica "primera escritura gana".
    """

    model_config = SettingsConfigDict(
        env_prefix="ONLYLABS_",
        extra="ignore",
        case_sensitive=False,
    )

    project_dir: Path = Field(
        default_factory=Path.cwd,
        description="Raíz del proyecto (contiene `.env` y `prisma/`).",
    )
    env_file: Path = Field(
        default=Path(".env"),
        description="Fichero KEY=VALUE relativo a `project_dir`.",
    )
    schema_path: Path = Field(
        default=Path("prisma") / "schema.prisma",
        description="Plantilla del schema Prisma, reescrita in situ.",
    )
    app_name: str = Field(
        default=DEFAULT_APP_NAME,
        min_length=1,
        description="Nombre del directorio de datos de la aplicación.",
    )
    database_dirname: str = Field(
        default="database",
        min_length=1,
        description="Subdirectorio para la base SQLite local.",
    )
    database_filename: str = Field(
        default="dev.db",
        min_length=1,
        description="Nombre del fichero SQLite local.",
    )
    orm_command: str = Field(
        default="npx prisma",
        min_length=1,
        description="Lanzador del CLI del ORM.",
    )

    @field_validator("app_name", "database_dirname", "database_filename", "orm_command")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def env_file_path(self) -> Path:
        return self.project_dir / self.env_file

    @property
    def schema_file_path(self) -> Path:
        return self.project_dir / self.schema_path


def load_settings() -> BootstrapSettings:
    """Construye `BootstrapSettings`; un valor inválido es un `SetupError`."""

    try:
        return BootstrapSettings()
    except ValidationError as exc:
        raise SetupError(f"Invalid ONLYLABS_ settings: {exc}") from exc


def _strip_matching_quotes(value: str) -> str:
    if (value.startswith('"') and value.endswith('"')) or (
        value.startswith("'") and value.endswith("'")
    ):
        return value[1:-1]
    return value


def parse_env_lines(text: str) -> list[tuple[str, str]]:
    """Parsea un `.env` en pares (clave, valor) en orden de aparición.

    Reglas:
    - Se ignoran líneas vacías y las que empiezan por `#` (tras strip).
    - Líneas sin `=` (o sin nada antes del primer `=`) se ignoran.
    - Se quita un único par de comillas que envuelva el valor.
    """

    pairs: list[tuple[str, str]] = []
    for raw_line in text.split("\n"):
        if not raw_line or raw_line.strip().startswith("#"):
            continue
        key, sep, value = raw_line.partition("=")
        if not sep or not key:
            continue
        key = key.strip()
        if not key:
            continue
        pairs.append((key, _strip_matching_quotes(value.strip())))
    return pairs


def load_env_file(
    path: Path,
    env: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """Aplica un `.env` sobre `env` (por defecto `os.environ`).

    Solo se escriben claves ausentes o vacías; devuelve las aplicadas.
    Un fichero inexistente equivale a "sin overrides".
    """

    target = os.environ if env is None else env
    if not path.is_file():
        return {}

    applied: dict[str, str] = {}
    for key, value in parse_env_lines(path.read_text(encoding="utf-8")):
        if target.get(key):
            continue
        target[key] = value
        applied[key] = value
    return applied


def get_app_data_dir(
    *,
    platform: str | None = None,
    home: Path | None = None,
    env: Mapping[str, str] | None = None,
    app_name: str = DEFAULT_APP_NAME,
) -> Path:
    """Directorio de datos por usuario (cross-platform, sin dependencias)."""

    platform = sys.platform if platform is None else platform
    home = Path.home() if home is None else home
    env = os.environ if env is None else env

    if platform == "darwin":
        return home / "Library" / "Application Support" / app_name
    if platform == "win32":
        base = env.get("APPDATA") or str(home / "AppData" / "Roaming")
        return Path(base) / app_name
    return home / ".config" / app_name


def get_database_dir(
    settings: BootstrapSettings,
    *,
    platform: str | None = None,
    home: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path:
    app_dir = get_app_data_dir(platform=platform, home=home, env=env, app_name=settings.app_name)
    return app_dir / settings.database_dirname


def resolve_embedded_db_path(
    settings: BootstrapSettings,
    *,
    platform: str | None = None,
    home: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Ruta del fichero SQLite local; crea el directorio si falta."""

    db_dir = get_database_dir(settings, platform=platform, home=home, env=env)
    try:
        db_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(db_dir, str(exc)) from exc
    return db_dir / settings.database_filename
