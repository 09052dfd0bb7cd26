"""Database provider detection.

The provider is derived only from the scheme prefix of `DATABASE_URL`:
anything that is not a `postgresql://` URL (including no URL at all) is
treated as a local SQLite file.
"""

from __future__ import annotations

from enum import Enum

NETWORKED_URL_PREFIX = "postgresql://"


class Provider(str, Enum):
    """Database providers understood by the schema template."""

    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"

    @property
    def is_networked(self) -> bool:
        return self is Provider.POSTGRESQL

    @property
    def kind(self) -> str:
        """`networked` or `embedded`."""

        return "networked" if self.is_networked else "embedded"

    @property
    def mode(self) -> str:
        """Deployment mode label used in console output."""

        return "CLOUD" if self.is_networked else "LOCAL"

    def label(self) -> str:
        """Human readable label, e.g. `CLOUD (PostgreSQL)`."""

        name = "PostgreSQL" if self.is_networked else "SQLite"
        return f"{self.mode} ({name})"


def classify_database_url(url: str | None) -> Provider:
    if url and url.startswith(NETWORKED_URL_PREFIX):
        return Provider.POSTGRESQL
    return Provider.SQLITE
