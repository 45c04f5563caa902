"""Errores del núcleo de detección de fallas.

Todos son locales y síncronos: el núcleo no hace I/O, así que no hay
reintentos ni fallas parciales.
"""

from __future__ import annotations


class FaultDetectionError(Exception):
    """Base de los errores del clasificador."""


class ModelConfigError(FaultDetectionError, ValueError):
    """Configuración del modelo fuera de los límites documentados."""


class UnknownParameterError(FaultDetectionError, KeyError):
    """Se pidió clasificar un parámetro que no existe."""

    def __init__(self, parameter: str) -> None:
        super().__init__(parameter)
        self.parameter = parameter

    def __str__(self) -> str:
        return f"Unknown parameter: {self.parameter}"
