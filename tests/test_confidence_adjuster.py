"""Tests del ajuste de confianza por historial."""

import pytest

from ml_service.config.ml_config import HistoryConfig
from ml_service.history.confidence_adjuster import ConfidenceAdjuster
from ml_service.models.detection import ENGINE_TEMP
from ml_service.sliding_window_buffer import SlidingWindowBuffer


def _window(reading_factory, temps, max_points=10):
    return SlidingWindowBuffer.from_history(
        [reading_factory(engine_temp=t) for t in temps], max_points=max_points
    )


# =============================================================================
# VENTANA
# =============================================================================

class TestSlidingWindow:
    def test_keeps_last_points(self, reading_factory):
        window = _window(reading_factory, range(20))
        assert len(window) == 10
        assert window.values(ENGINE_TEMP) == [float(t) for t in range(10, 20)]

    def test_stats_population_variance_and_slope(self, reading_factory):
        stats = _window(reading_factory, [80, 82, 84, 86, 88]).stats(ENGINE_TEMP)
        assert stats.mean == pytest.approx(84.0)
        assert stats.variance == pytest.approx(8.0)
        assert stats.slope == pytest.approx(2.0)
        assert stats.last_value == 88.0

    def test_empty_window_has_no_stats(self):
        assert SlidingWindowBuffer().stats(ENGINE_TEMP) is None


# =============================================================================
# FACTORES
# =============================================================================

class TestAdjust:
    @pytest.fixture
    def adjuster(self):
        return ConfidenceAdjuster()

    def test_short_history_passes_through(self, adjuster, reading_factory):
        window = _window(reading_factory, [85, 85, 85, 85])
        assert adjuster.adjust(ENGINE_TEMP, 0.7, 85, window) == 0.7

    def test_stable_normal_history_unchanged(self, adjuster, reading_factory):
        window = _window(reading_factory, [85] * 5)
        assert adjuster.adjust(ENGINE_TEMP, 0.7, 85, window) == pytest.approx(0.7)

    def test_trending_history_penalized(self, adjuster, reading_factory):
        window = _window(reading_factory, [80, 82, 84, 86, 88])
        assert adjuster.adjust(ENGINE_TEMP, 0.8, 85, window) == pytest.approx(0.8 * 0.95)

    def test_noisy_history_penalized(self, adjuster, reading_factory):
        # varianza 5400 > (150 * 0.1)^2, pendiente 0
        window = _window(reading_factory, [0, 150, 0, 150, 0])
        assert adjuster.adjust(ENGINE_TEMP, 0.8, 85, window) == pytest.approx(0.8 * 0.9)

    def test_abnormal_current_value_boosted(self, adjuster, reading_factory):
        window = _window(reading_factory, [85] * 5)
        assert adjuster.adjust(ENGINE_TEMP, 0.8, 115, window) == pytest.approx(0.88)

    def test_result_clamped(self, adjuster, reading_factory):
        window = _window(reading_factory, [85] * 5)
        assert adjuster.adjust(ENGINE_TEMP, 0.98, 115, window) == 0.99

    def test_custom_min_points(self, reading_factory):
        adjuster = ConfidenceAdjuster(HistoryConfig(min_points=2))
        window = _window(reading_factory, [80, 90])
        assert adjuster.adjust(ENGINE_TEMP, 0.8, 85, window) == pytest.approx(0.8 * 0.95)
