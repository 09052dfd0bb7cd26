"""Errores del bootstrap de base de datos.

Taxonomía:
- `UsageError`: invocación sin comando (exit 1, no se lanza nada).
- `SetupError`: fallo al preparar el entorno (directorio, schema). Aborta
  antes de ejecutar el comando externo.
- `ExternalToolError`: el comando externo terminó con código != 0.
"""

from __future__ import annotations

from pathlib import Path

GENERIC_FAILURE_EXIT_CODE = 1


class BootstrapError(Exception):
    """Base de todos los errores del bootstrap."""

    exit_code: int = GENERIC_FAILURE_EXIT_CODE


class UsageError(BootstrapError):
    """No se recibió ningún comando para ejecutar."""


class SetupError(BootstrapError):
    """Fallo irrecuperable preparando el entorno."""


class DirectoryCreateError(SetupError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not create database directory {path}: {reason}")
        self.path = path


class SchemaReadError(SetupError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not read schema template {path}: {reason}")
        self.path = path


class SchemaWriteError(SetupError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not write schema {path}: {reason}")
        self.path = path


class ExternalToolError(BootstrapError):
    """El comando externo terminó con error; su código se propaga tal cual."""

    def __init__(self, command: str, exit_code: int) -> None:
        super().__init__(f"Command failed with exit code {exit_code}: {command}")
        self.command = command
        self.exit_code = exit_code
