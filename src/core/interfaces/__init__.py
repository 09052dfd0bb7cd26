"""Interfaces/abstracciones del Core.

Define contratos (Protocol) que implementan adaptadores concretos.
"""

from core.interfaces.runner import CommandRunner

__all__ = ["CommandRunner"]
