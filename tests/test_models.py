"""Tests de los tipos de dominio."""

from datetime import datetime, timezone

import pytest

from ml_service.errors import UnknownParameterError
from ml_service.models.detection import (
    DEFAULT_PARAMETER_SPECS,
    DetectionStatus,
    SensorReading,
    with_parameter_enabled,
)
from ml_service.utils.numeric_precision import is_valid_sensor_value, round_for_display


class TestSensorReading:
    def test_from_camel_case_mapping(self):
        reading = SensorReading.from_mapping(
            {
                "engineTemp": 85,
                "oilPressure": 2.5,
                "batteryVoltage": 12.6,
                "engineVibration": 12,
                "rpm": 2000,
                "timestamp": "2026-01-31T08:00:00Z",
            }
        )
        assert reading.engine_rpm == 2000.0
        assert reading.timestamp == datetime(2026, 1, 31, 8, 0, tzinfo=timezone.utc)

    def test_from_snake_case_mapping(self):
        reading = SensorReading.from_mapping(
            {
                "engine_temp": 90,
                "oil_pressure": 3.5,
                "battery_voltage": 13.0,
                "engine_vibration": 18,
                "engineRPM": 2500,
            }
        )
        assert reading.value_of("engine_temp") == 90.0
        assert reading.timestamp.tzinfo is not None

    def test_missing_channel(self):
        with pytest.raises(KeyError):
            SensorReading.from_mapping({"engineTemp": 85})

    def test_value_of_unknown(self, normal_reading):
        with pytest.raises(UnknownParameterError):
            normal_reading.value_of("fuel_level")


class TestParameterSpecs:
    def test_toggle_returns_new_tuple(self):
        specs = with_parameter_enabled(DEFAULT_PARAMETER_SPECS, "oil_pressure", False)
        assert specs is not DEFAULT_PARAMETER_SPECS
        assert [s.enabled for s in specs] == [True, False, True, True]
        assert all(s.enabled for s in DEFAULT_PARAMETER_SPECS)

    def test_weights_within_unit_interval(self):
        assert all(0 < s.weight <= 1 for s in DEFAULT_PARAMETER_SPECS)


class TestNumericHelpers:
    def test_status_severity_order(self):
        assert [s.severity for s in DetectionStatus] == [0, 1, 2]

    @pytest.mark.parametrize(
        "value,expected", [(0.864, 0.86), (0.8712, 0.87), (0.125, 0.13), (0.5, 0.5)]
    )
    def test_round_half_up(self, value, expected):
        assert round_for_display(value) == expected

    @pytest.mark.parametrize("value", [None, True, float("nan"), float("inf"), "abc"])
    def test_invalid_sensor_values(self, value):
        assert is_valid_sensor_value(value) is False


class TestSensorReadingRejectsNonFinite:
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), True, "abc"])
    def test_invalid_channel_value(self, value):
        data = {
            "engineTemp": value,
            "oilPressure": 4.0,
            "batteryVoltage": 12.6,
            "engineVibration": 12,
            "rpm": 2000,
        }
        with pytest.raises(ValueError, match="engineTemp"):
            SensorReading.from_mapping(data)
