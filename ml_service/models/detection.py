"""Modelos de datos del detector de fallas.

Dataclasses inmutables para lecturas, especificaciones de parámetro y
resultados de detección.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Mapping, Optional

from ml_service.errors import UnknownParameterError
from ml_service.utils.numeric_precision import is_valid_sensor_value


class DetectionStatus(str, Enum):
    """Severidad de una detección."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    DetectionStatus.NORMAL: 0,
    DetectionStatus.WARNING: 1,
    DetectionStatus.CRITICAL: 2,
}


ENGINE_TEMP = "engine_temp"
OIL_PRESSURE = "oil_pressure"
BATTERY_VOLTAGE = "battery_voltage"
ENGINE_VIBRATION = "engine_vibration"
ENGINE_RPM = "engine_rpm"

# Orden canónico de los parámetros clasificados (el RPM no se clasifica)
CLASSIFIED_PARAMETERS = (ENGINE_TEMP, OIL_PRESSURE, BATTERY_VOLTAGE, ENGINE_VIBRATION)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SensorReading:
    """Una lectura de los cinco canales del motor."""

    engine_temp: float  # °C
    oil_pressure: float  # bar
    battery_voltage: float  # V
    engine_vibration: float  # Hz
    engine_rpm: float
    timestamp: datetime = field(default_factory=_utc_now)

    def value_of(self, parameter: str) -> float:
        if parameter not in _READING_FIELDS:
            raise UnknownParameterError(parameter)
        return float(getattr(self, parameter))

    @classmethod
    def from_mapping(cls, data: Mapping) -> "SensorReading":
        """Construye una lectura desde un dict camelCase o snake_case.

        Acepta ``engineRPM`` o ``rpm`` para las revoluciones. Un canal
        faltante lanza KeyError; NaN, Infinity o bool lanzan ValueError.
        """
        def pick(*keys):
            for key in keys:
                if key in data and data[key] is not None:
                    value = data[key]
                    if not is_valid_sensor_value(value):
                        raise ValueError(f"{key} must be a finite number, got {value!r}")
                    return value
            raise KeyError(keys[0])

        ts = data.get("timestamp")
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts.replace("Z", "+00:00"))

        kwargs = dict(
            engine_temp=float(pick("engineTemp", "engine_temp")),
            oil_pressure=float(pick("oilPressure", "oil_pressure")),
            battery_voltage=float(pick("batteryVoltage", "battery_voltage")),
            engine_vibration=float(pick("engineVibration", "engine_vibration")),
            engine_rpm=float(pick("engineRPM", "rpm", "engine_rpm")),
        )
        if ts is not None:
            kwargs["timestamp"] = ts
        return cls(**kwargs)


_READING_FIELDS = frozenset(
    {ENGINE_TEMP, OIL_PRESSURE, BATTERY_VOLTAGE, ENGINE_VIBRATION, ENGINE_RPM}
)


@dataclass(frozen=True)
class ParameterSpec:
    """Metadatos estáticos de un parámetro clasificado."""

    name: str
    display_name: str
    description: str
    weight: float  # escala la confianza, 0-1, independiente por parámetro
    enabled: bool = True


DEFAULT_PARAMETER_SPECS: tuple[ParameterSpec, ...] = (
    ParameterSpec(
        name=ENGINE_TEMP,
        display_name="Suhu Mesin",
        description="Analisis suhu mesin untuk deteksi overheating",
        weight=0.9,
    ),
    ParameterSpec(
        name=OIL_PRESSURE,
        display_name="Tekanan Oli",
        description="Monitoring tekanan oli untuk kesehatan mesin",
        weight=0.95,
    ),
    ParameterSpec(
        name=BATTERY_VOLTAGE,
        display_name="Tegangan Baterai",
        description="Pemantauan sistem kelistrikan",
        weight=0.9,
    ),
    ParameterSpec(
        name=ENGINE_VIBRATION,
        display_name="Getaran Mesin",
        description="Deteksi ketidakseimbangan dan kerusakan mekanis",
        weight=0.9,
    ),
)


def find_parameter(specs: Iterable[ParameterSpec], name: str) -> ParameterSpec:
    for spec in specs:
        if spec.name == name:
            return spec
    raise UnknownParameterError(name)


def with_parameter_enabled(
    specs: Iterable[ParameterSpec], name: str, enabled: bool
) -> tuple[ParameterSpec, ...]:
    """Devuelve una nueva tupla de specs con ``name`` activado/desactivado."""
    specs = tuple(specs)
    find_parameter(specs, name)
    return tuple(
        replace(spec, enabled=enabled) if spec.name == name else spec for spec in specs
    )


@dataclass(frozen=True)
class DetectionResult:
    """Veredicto del clasificador para un parámetro."""

    parameter: str
    status: DetectionStatus
    confidence: float  # 0.01-0.99, redondeado a 2 decimales
    recommendation: str
    timestamp: datetime
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "parameter": self.parameter,
            "confidence": self.confidence,
            "status": self.status.value,
            "recommendation": self.recommendation,
            "timestamp": self.timestamp.isoformat(),
        }
