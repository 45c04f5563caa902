"""Rangos estáticos por canal del motor.

Se usan en el ajuste de confianza por historial y en la validación de
lecturas. Configuración fija, no derivada de datos.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .detection import (
    BATTERY_VOLTAGE,
    ENGINE_RPM,
    ENGINE_TEMP,
    ENGINE_VIBRATION,
    OIL_PRESSURE,
)


@dataclass(frozen=True)
class Band:
    min_value: float
    max_value: float

    def contains(self, value: float) -> bool:
        return self.min_value <= value <= self.max_value


@dataclass(frozen=True)
class SensorRange:
    """Rango total del canal y sus tres bandas con nombre."""

    min_value: float
    max_value: float
    normal: Band
    warning: Band
    critical: Band
    unit: str = ""

    @property
    def span(self) -> float:
        return self.max_value - self.min_value

    def violates(self, value: float) -> bool:
        """Verifica si un valor sale del rango total."""
        return value < self.min_value or value > self.max_value

    def outside_normal(self, value: float) -> bool:
        return not self.normal.contains(value)


DEFAULT_SENSOR_RANGES: Mapping[str, SensorRange] = {
    ENGINE_TEMP: SensorRange(
        min_value=0.0,
        max_value=150.0,
        normal=Band(80.0, 95.0),
        warning=Band(95.0, 110.0),
        critical=Band(110.0, 150.0),
        unit="°C",
    ),
    OIL_PRESSURE: SensorRange(
        min_value=0.0,
        max_value=10.0,
        normal=Band(3.0, 6.0),
        warning=Band(1.5, 3.0),
        critical=Band(0.0, 1.5),
        unit=" bar",
    ),
    BATTERY_VOLTAGE: SensorRange(
        min_value=8.0,
        max_value=16.0,
        normal=Band(12.4, 14.4),
        warning=Band(11.8, 12.4),
        critical=Band(8.0, 11.8),
        unit="V",
    ),
    ENGINE_VIBRATION: SensorRange(
        min_value=0.0,
        max_value=100.0,
        normal=Band(0.0, 20.0),
        warning=Band(20.0, 50.0),
        critical=Band(50.0, 100.0),
        unit="Hz",
    ),
    ENGINE_RPM: SensorRange(
        min_value=0.0,
        max_value=8000.0,
        normal=Band(800.0, 3000.0),
        warning=Band(3000.0, 5000.0),
        critical=Band(5000.0, 8000.0),
    ),
}
