"""Modelos del dominio (Pydantic v2).

Nota:
- `DatabaseConfig` es una foto inmutable del entorno ya configurado; los
  pasos posteriores la reciben explícitamente en vez de releer `os.environ`.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.provider import Provider

DATABASE_URL_VAR = "DATABASE_URL"
DIRECT_URL_VAR = "DIRECT_URL"
DATABASE_PROVIDER_VAR = "DATABASE_PROVIDER"

EMBEDDED_URL_PREFIX = "file:"


def mask_database_url(url: str | None) -> str:
    """Oculta la contraseña de una URL de conexión para mostrarla en consola."""

    if not url:
        return "-"
    if url.startswith(EMBEDDED_URL_PREFIX):
        return url
    scheme, sep, rest = url.partition("://")
    if not sep:
        return url
    authority = re.split(r"[/?#]", rest, maxsplit=1)[0]
    tail = rest[len(authority) :]
    userinfo, at, host = authority.rpartition("@")
    if not at or ":" not in userinfo:
        return url
    username = userinfo.split(":", 1)[0]
    masked = f"{username}:***" if username else "***"
    return f"{scheme}://{masked}@{host}{tail}"


class DatabaseConfig(BaseModel):
    """Configuración de base de datos resuelta para una invocación.

    Invariantes:
    - `database_url` nunca está vacío.
    - `provider` es siempre la clasificación de `database_url`.
    - `direct_url` está presente si el provider es PostgreSQL (o si ya venía
      definido en el entorno).
    """

    model_config = ConfigDict(frozen=True)

    provider: Provider = Field(
        ...,
        description="Provider literal escrito en el schema.",
    )
    database_url: str = Field(
        ...,
        min_length=1,
        description="URL principal de conexión (DATABASE_URL).",
    )
    direct_url: str | None = Field(
        default=None,
        description="URL directa para migraciones (DIRECT_URL).",
    )
    embedded_path: Path | None = Field(
        default=None,
        description="Ruta del fichero SQLite cuando se sintetizó DATABASE_URL.",
    )

    @property
    def masked_database_url(self) -> str:
        return mask_database_url(self.database_url)

    @property
    def masked_direct_url(self) -> str:
        return mask_database_url(self.direct_url)
