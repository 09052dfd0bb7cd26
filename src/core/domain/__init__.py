"""Modelos y tipos del dominio.

Aquí viven estructuras puras (enums, modelos Pydantic v2); el dominio no
conoce subprocess, CLI ni el sistema de ficheros.
"""

from core.domain.models import DatabaseConfig
from core.domain.provider import Provider, classify_database_url

__all__ = ["DatabaseConfig", "Provider", "classify_database_url"]
