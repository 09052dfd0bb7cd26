"""Ejecución del comando externo vía subprocess.

El comando es una cadena opaca (puede llevar `&&`, comillas, etc.), así que
se delega en la shell. stdio se hereda: no hay buffering ni captura.
"""

from __future__ import annotations

import subprocess
from typing import Mapping

from core.errors import GENERIC_FAILURE_EXIT_CODE


def run_shell_command(command: str, *, env: Mapping[str, str]) -> int:
    """Ejecuta `command` y devuelve su código de salida.

    Un proceso terminado por señal (código negativo) o una shell que no
    arranca se reportan como `GENERIC_FAILURE_EXIT_CODE`.
    """

    try:
        completed = subprocess.run(command, shell=True, env=dict(env), check=False)
    except OSError:
        return GENERIC_FAILURE_EXIT_CODE
    if completed.returncode < 0:
        return GENERIC_FAILURE_EXIT_CODE
    return completed.returncode
