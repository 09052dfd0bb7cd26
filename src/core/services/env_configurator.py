"""Completa las variables de entorno que necesita el CLI del ORM."""

from __future__ import annotations

import os
from pathlib import Path
from typing import MutableMapping

from core.config import BootstrapSettings, resolve_embedded_db_path
from core.domain.models import (
    DATABASE_PROVIDER_VAR,
    DATABASE_URL_VAR,
    DIRECT_URL_VAR,
    EMBEDDED_URL_PREFIX,
    DatabaseConfig,
)
from core.domain.provider import classify_database_url


def configure_database_env(
    env: MutableMapping[str, str] | None = None,
    *,
    settings: BootstrapSettings,
    platform: str | None = None,
    home: Path | None = None,
) -> DatabaseConfig:
    """Rellena DATABASE_URL, DATABASE_PROVIDER y DIRECT_URL en `env`.

    Orden:
    1) Sin DATABASE_URL: se sintetiza `file:<ruta>` hacia la base SQLite
       local (creando su directorio).
    2) DATABASE_PROVIDER refleja la clasificación de DATABASE_URL.
    3) PostgreSQL sin DIRECT_URL: DIRECT_URL replica DATABASE_URL.
    """

    target = os.environ if env is None else env

    embedded_path: Path | None = None
    if not target.get(DATABASE_URL_VAR):
        embedded_path = resolve_embedded_db_path(settings, platform=platform, home=home, env=target)
        target[DATABASE_URL_VAR] = f"{EMBEDDED_URL_PREFIX}{embedded_path}"

    database_url = target[DATABASE_URL_VAR]
    provider = classify_database_url(database_url)
    target[DATABASE_PROVIDER_VAR] = provider.value

    if provider.is_networked and not target.get(DIRECT_URL_VAR):
        target[DIRECT_URL_VAR] = database_url

    return DatabaseConfig(
        provider=provider,
        database_url=database_url,
        direct_url=target.get(DIRECT_URL_VAR) or None,
        embedded_path=embedded_path,
    )
