"""Reescritura del schema Prisma según el provider.

Reglas (sobre el texto, no sobre un AST de Prisma):
1. `provider = env("DATABASE_PROVIDER")` -> `provider = "<literal>"`.
2. Un literal ya fijado (`"postgresql"` / `"sqlite"`) se reemplaza por el
   actual, así repetir la operación es un punto fijo.
3. PostgreSQL: `directUrl = env("DIRECT_URL")` se conserva; si falta, se
   vuelve a insertar bajo la línea `url` del datasource.
4. SQLite: se elimina la línea `directUrl` completa (con su salto de línea).
"""

from __future__ import annotations

import re
from pathlib import Path

from core.domain.provider import Provider
from core.errors import SchemaReadError, SchemaWriteError

DIRECT_URL_FIELD = 'directUrl = env("DIRECT_URL")'

_PROVIDER_PLACEHOLDER_RE = re.compile(r'provider\s*=\s*env\("DATABASE_PROVIDER"\)')
_PROVIDER_LITERAL_RE = re.compile(r'provider\s*=\s*"(postgresql|sqlite)"')
_DIRECT_URL_RE = re.compile(r'directUrl\s*=\s*env\("DIRECT_URL"\)')
_DIRECT_URL_LINE_RE = re.compile(r'\n\s*directUrl\s*=\s*env\("DIRECT_URL"\)')
_DATASOURCE_URL_LINE_RE = re.compile(
    r'^(?P<indent>[ \t]*)url\s*=\s*env\("DATABASE_URL"\)[^\n]*$',
    re.MULTILINE,
)
_DATASOURCE_PROVIDER_LINE_RE = re.compile(
    r'^(?P<indent>[ \t]*)provider\s*=\s*"(?:postgresql|sqlite)"[^\n]*$',
    re.MULTILINE,
)


def _insert_direct_url(text: str) -> str:
    anchor = _DATASOURCE_URL_LINE_RE.search(text) or _DATASOURCE_PROVIDER_LINE_RE.search(text)
    if anchor is None:
        return text
    insertion = f"\n{anchor.group('indent')}{DIRECT_URL_FIELD}"
    return text[: anchor.end()] + insertion + text[anchor.end() :]


def render_schema(text: str, provider: Provider) -> str:
    """Devuelve el schema con el provider resuelto (función pura)."""

    literal = f'provider = "{provider.value}"'
    rendered = _PROVIDER_PLACEHOLDER_RE.sub(literal, text, count=1)
    rendered = _PROVIDER_LITERAL_RE.sub(literal, rendered, count=1)

    if provider.is_networked:
        if _DIRECT_URL_RE.search(rendered) is None:
            rendered = _insert_direct_url(rendered)
    else:
        rendered = _DIRECT_URL_LINE_RE.sub("", rendered)
    return rendered


def generate_schema_file(path: Path, provider: Provider) -> str:
    """Reescribe `path` in situ y devuelve el texto generado."""

    try:
        template = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaReadError(path, exc.strerror or str(exc)) from exc

    generated = render_schema(template, provider)

    try:
        path.write_text(generated, encoding="utf-8")
    except OSError as exc:
        raise SchemaWriteError(path, exc.strerror or str(exc)) from exc
    return generated
