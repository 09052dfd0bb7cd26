"""Lanzador de `onlylabs-db` sin instalar el paquete.

Ejemplos desde la raíz del proyecto:
- `python -m main run "npx prisma generate"`: configura DATABASE_URL,
  DATABASE_PROVIDER y DIRECT_URL, regenera `prisma/schema.prisma` y ejecuta
  el comando.
- `python -m main postinstall`: cliente Prisma + tablas (SQLite o PostgreSQL).
- `python -m main generate-schema` / `python -m main doctor`.

Añade `src/` al path porque los paquetes `cli`, `core` y `adapters` viven ahí.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
