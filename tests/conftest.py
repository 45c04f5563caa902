"""Fixtures compartidas."""

from datetime import datetime, timezone

import pytest

from ml_service.models.detection import SensorReading
from ml_service.services.fault_detection_service import FaultDetectionService

FIXED_NOW = datetime(2026, 1, 31, 8, 0, tzinfo=timezone.utc)


def make_reading(
    engine_temp: float = 85.0,
    oil_pressure: float = 2.5,
    battery_voltage: float = 12.6,
    engine_vibration: float = 12.0,
    engine_rpm: float = 2000.0,
    timestamp: datetime = FIXED_NOW,
) -> SensorReading:
    return SensorReading(
        engine_temp=engine_temp,
        oil_pressure=oil_pressure,
        battery_voltage=battery_voltage,
        engine_vibration=engine_vibration,
        engine_rpm=engine_rpm,
        timestamp=timestamp,
    )


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def normal_reading() -> SensorReading:
    """Lectura típica: solo la presión de aceite queda en warning."""
    return make_reading()


@pytest.fixture
def critical_reading() -> SensorReading:
    """Lectura con los cuatro parámetros en zona crítica."""
    return make_reading(
        engine_temp=115.0,
        oil_pressure=0.8,
        battery_voltage=10.5,
        engine_vibration=35.0,
        engine_rpm=2500.0,
    )


@pytest.fixture
def service(fixed_clock) -> FaultDetectionService:
    return FaultDetectionService(clock=fixed_clock)


@pytest.fixture
def reading_factory():
    """Constructor de lecturas con valores por defecto normales."""
    return make_reading
