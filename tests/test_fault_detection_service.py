"""Tests de la fachada FaultDetectionService."""

import pytest

from ml_service.config.ml_config import ForestConfig
from ml_service.errors import UnknownParameterError
from ml_service.explain.recommendation_builder import DANGER_MARKER
from ml_service.models.detection import (
    CLASSIFIED_PARAMETERS,
    ENGINE_TEMP,
    ENGINE_VIBRATION,
    OIL_PRESSURE,
    DetectionStatus,
)
from ml_service.services.fault_detection_service import FaultDetectionService


def _by_parameter(results):
    return {r.parameter: r for r in results}


# =============================================================================
# ANÁLISIS
# =============================================================================

class TestAnalyze:
    def test_critical_reading(self, service, critical_reading, fixed_clock):
        results = service.analyze(critical_reading)

        assert [r.parameter for r in results] == list(CLASSIFIED_PARAMETERS)
        for r in results:
            assert r.status == DetectionStatus.CRITICAL
            assert r.confidence >= 0.80
            assert r.recommendation.startswith(DANGER_MARKER)
            assert r.timestamp == fixed_clock()
            assert r.id is None

        confidences = [r.confidence for r in results]
        assert confidences == [0.88, 0.91, 0.86, 0.87]

    def test_typical_reading(self, service, normal_reading):
        results = _by_parameter(service.analyze(normal_reading))

        assert results[ENGINE_TEMP].status == DetectionStatus.NORMAL
        assert results[OIL_PRESSURE].status == DetectionStatus.WARNING
        assert results["battery_voltage"].status == DetectionStatus.NORMAL
        assert results[ENGINE_VIBRATION].status == DetectionStatus.NORMAL
        assert results[ENGINE_TEMP].confidence == 0.86
        assert results[ENGINE_VIBRATION].confidence == 0.85
        assert "2.5 bar" in results[OIL_PRESSURE].recommendation

    def test_deterministic(self, service, normal_reading):
        history = [normal_reading] * 6
        assert service.analyze(normal_reading, history) == service.analyze(normal_reading, history)

    @pytest.mark.parametrize("temps", [(60, 90), (90, 115), (60, 115)])
    def test_severity_monotonic_in_temperature(self, service, reading_factory, temps):
        low, high = (
            _by_parameter(service.analyze(reading_factory(engine_temp=t)))[ENGINE_TEMP]
            for t in temps
        )
        assert high.status.severity >= low.status.severity

    def test_confidence_rounded_to_two_decimals(self, service, reading_factory):
        for r in service.analyze(reading_factory(engine_temp=93.3, engine_vibration=22)):
            assert round(r.confidence, 2) == r.confidence
            assert 0.01 <= r.confidence <= 0.99

    def test_history_adjusts_confidence(self, service, normal_reading, reading_factory):
        trending = [reading_factory(engine_temp=t) for t in (80, 82, 84, 86, 88)]
        temp = _by_parameter(service.analyze(normal_reading, trending))[ENGINE_TEMP]
        assert temp.confidence == 0.82

    def test_only_last_ten_history_points_used(self, service, normal_reading, reading_factory):
        noisy = [reading_factory(engine_temp=t) for t in (0, 150) * 5]
        history = noisy + [normal_reading] * 10
        assert service.analyze(normal_reading, history) == service.analyze(
            normal_reading, [normal_reading] * 10
        )


# =============================================================================
# PARÁMETROS
# =============================================================================

class TestParameters:
    def test_disabled_parameter_excluded(self, service, normal_reading, reading_factory):
        history = [reading_factory(engine_temp=t) for t in (80, 82, 84, 86, 88)]
        before = _by_parameter(service.analyze(normal_reading, history))

        spec = service.set_parameter_enabled(OIL_PRESSURE, False)
        assert spec.enabled is False

        after = service.analyze(normal_reading, history)
        assert [r.parameter for r in after] == [
            p for p in CLASSIFIED_PARAMETERS if p != OIL_PRESSURE
        ]
        for result in after:
            assert result == before[result.parameter]

    def test_all_disabled_gives_empty_list(self, service, critical_reading):
        for name in CLASSIFIED_PARAMETERS:
            service.set_parameter_enabled(name, False)
        assert service.analyze(critical_reading) == []

    def test_analyze_parameter(self, service, critical_reading):
        result = service.analyze_parameter(ENGINE_TEMP, critical_reading)
        assert result.status == DetectionStatus.CRITICAL
        assert result.confidence == 0.88

    def test_analyze_parameter_when_disabled(self, service, critical_reading):
        service.set_parameter_enabled(ENGINE_TEMP, False)
        assert service.analyze_parameter(ENGINE_TEMP, critical_reading).status == (
            DetectionStatus.CRITICAL
        )

    def test_unknown_parameter(self, service, critical_reading):
        with pytest.raises(UnknownParameterError) as exc:
            service.analyze_parameter("fuel_level", critical_reading)
        assert exc.value.parameter == "fuel_level"
        assert str(exc.value) == "Unknown parameter: fuel_level"

    def test_rpm_is_not_classified(self, service, critical_reading):
        with pytest.raises(UnknownParameterError):
            service.analyze_parameter("engine_rpm", critical_reading)

    def test_toggle_unknown_parameter(self, service):
        with pytest.raises(KeyError):
            service.set_parameter_enabled("fuel_level", True)


# =============================================================================
# LOTES
# =============================================================================

class TestBatchAnalyze:
    def test_matches_analyze_with_prefix_history(self, service, reading_factory):
        readings = [
            reading_factory(engine_temp=80 + 3 * i, oil_pressure=4.0 - 0.2 * i)
            for i in range(14)
        ]
        batch = service.batch_analyze(readings)

        assert len(batch) == len(readings)
        for i, results in enumerate(batch):
            assert results == service.analyze(readings[i], readings[:i])

    def test_empty_batch(self, service):
        assert service.batch_analyze([]) == []


# =============================================================================
# MODELO Y ESTADÍSTICAS
# =============================================================================

class TestModel:
    def test_default_model(self, service):
        assert service.get_model() == ForestConfig()
        assert service.get_model().to_dict() == {
            "type": "RandomForest",
            "parameters": {"nEstimators": 100, "maxDepth": 10, "threshold": 0.7},
        }

    def test_update_model_rebuilds_rules(self, service, critical_reading):
        updated = service.update_model(ForestConfig(n_estimators=3))
        assert service.get_model() is updated

        vibration = _by_parameter(service.analyze(critical_reading))[ENGINE_VIBRATION]
        assert vibration.status == DetectionStatus.NORMAL
        assert vibration.confidence == 0.01


class TestFaultStatistics:
    def test_statistics_of_results(self, service, critical_reading, normal_reading):
        results = service.analyze(critical_reading) + service.analyze(normal_reading)
        stats = service.get_fault_statistics(results)

        assert stats.total_results == 8
        assert stats.critical_faults == 4
        assert stats.warning_faults == 1
        assert stats.normal_readings == 3
        assert stats.total_faults == 5
        assert stats.faults_by_parameter[OIL_PRESSURE].to_dict() == {
            "critical": 1,
            "warning": 1,
            "normal": 0,
        }


def test_service_instances_are_independent(fixed_clock, critical_reading):
    a = FaultDetectionService(clock=fixed_clock)
    b = FaultDetectionService(clock=fixed_clock)
    a.set_parameter_enabled(ENGINE_TEMP, False)
    assert len(b.analyze(critical_reading)) == 4
