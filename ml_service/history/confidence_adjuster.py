"""Ajuste de confianza por consistencia histórica.

Heurístico local de suavizado, no un modelo estadístico:
- historial ruidoso (varianza alta respecto al rango del canal) → penaliza
- historial con tendencia → penaliza
- valor actual fuera de la banda normal → refuerza
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from ml_service.config.ml_config import HistoryConfig
from ml_service.models.regression_model import compute_trend
from ml_service.models.sensor_ranges import DEFAULT_SENSOR_RANGES, SensorRange
from ml_service.sliding_window_buffer import SlidingWindowBuffer, WindowStats
from ml_service.utils.numeric_precision import clamp_confidence

logger = logging.getLogger(__name__)


def adjustment_factor(
    stats: WindowStats,
    current_value: float,
    sensor_range: Optional[SensorRange],
    cfg: HistoryConfig,
) -> float:
    factor = 1.0

    if sensor_range is not None:
        tolerated = sensor_range.span * cfg.variance_range_ratio
        if stats.variance > tolerated ** 2:
            factor *= cfg.unstable_factor

    if compute_trend(stats.slope, eps=cfg.slope_threshold) != "stable":
        factor *= cfg.trending_factor

    if sensor_range is not None and sensor_range.outside_normal(current_value):
        factor *= cfg.abnormal_boost

    return factor


class ConfidenceAdjuster:
    """Refina la confianza base de un parámetro con su historial reciente."""

    def __init__(
        self,
        cfg: Optional[HistoryConfig] = None,
        ranges: Optional[Mapping[str, SensorRange]] = None,
    ) -> None:
        self._cfg = cfg or HistoryConfig()
        self._ranges = DEFAULT_SENSOR_RANGES if ranges is None else ranges

    @property
    def config(self) -> HistoryConfig:
        return self._cfg

    def adjust(
        self,
        parameter: str,
        base_confidence: float,
        current_value: float,
        window: SlidingWindowBuffer,
    ) -> float:
        """Devuelve la confianza ajustada (sin redondear).

        Con menos de ``min_points`` lecturas en la ventana, devuelve la base.
        """
        if len(window) < self._cfg.min_points:
            return base_confidence

        stats = window.stats(parameter)
        if stats is None:
            return base_confidence

        factor = adjustment_factor(stats, current_value, self._ranges.get(parameter), self._cfg)
        if factor != 1.0:
            logger.debug(
                "[HISTORY] %s factor=%.4f var=%.4f slope=%.4f valor=%s",
                parameter,
                factor,
                stats.variance,
                stats.slope,
                current_value,
            )
        return clamp_confidence(base_confidence * factor)
