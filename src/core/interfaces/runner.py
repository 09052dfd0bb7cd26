"""Contrato del ejecutor de comandos externos.

Por qué Protocol:
- El pipeline solo necesita "ejecuta esto con este entorno y dame el código
  de salida"; los tests sustituyen el subprocess real por un doble.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class CommandRunner(Protocol):
    """Ejecuta un comando de shell heredando stdio."""

    def __call__(self, command: str, *, env: Mapping[str, str]) -> int:
        """Devuelve el código de salida del proceso hijo."""

        ...
