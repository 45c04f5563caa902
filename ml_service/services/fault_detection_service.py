"""Fachada del detector de fallas.

Orquesta ensamble → ajuste por historial → recomendación para cada
parámetro activo. El servicio lo construye y lo posee el llamador; no hay
instancia global.

MODELO DE CONCURRENCIA:
El ensamble y la tupla de parámetros son valores inmutables. Reconfigurar
construye valores nuevos y cambia la referencia; cada análisis toma las
referencias una sola vez al empezar.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ml_service.config.ml_config import ForestConfig, HistoryConfig
from ml_service.explain.recommendation_builder import build_recommendation
from ml_service.forest.ensemble import Prediction, RuleEnsemble
from ml_service.history.confidence_adjuster import ConfidenceAdjuster
from ml_service.models.detection import (
    DEFAULT_PARAMETER_SPECS,
    DetectionResult,
    ParameterSpec,
    SensorReading,
    find_parameter,
    with_parameter_enabled,
)
from ml_service.models.sensor_ranges import DEFAULT_SENSOR_RANGES, SensorRange
from ml_service.sliding_window_buffer import SlidingWindowBuffer
from ml_service.statistics.fault_statistics import FaultStatistics, compute_fault_statistics
from ml_service.utils.numeric_precision import round_for_display

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FaultDetectionService:
    def __init__(
        self,
        model: Optional[ForestConfig] = None,
        parameters: Sequence[ParameterSpec] = DEFAULT_PARAMETER_SPECS,
        ranges: Optional[Mapping[str, SensorRange]] = None,
        history: Optional[HistoryConfig] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._ensemble = RuleEnsemble(model or ForestConfig())
        self._parameters: tuple[ParameterSpec, ...] = tuple(parameters)
        self._adjuster = ConfidenceAdjuster(
            history or HistoryConfig(),
            DEFAULT_SENSOR_RANGES if ranges is None else ranges,
        )
        self._clock = clock

    # ------------------------------------------------------------------
    # Configuración
    # ------------------------------------------------------------------

    def get_model(self) -> ForestConfig:
        return self._ensemble.config

    def update_model(self, model: ForestConfig) -> ForestConfig:
        """Reconstruye el ensamble con ``model`` y cambia la referencia."""
        ensemble = RuleEnsemble(model)
        self._ensemble = ensemble
        logger.info(
            "[DETECTION] Modelo actualizado n_estimators=%d max_depth=%d threshold=%s",
            model.n_estimators,
            model.max_depth,
            model.threshold,
        )
        return ensemble.config

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return self._parameters

    def set_parameter_enabled(self, name: str, enabled: bool) -> ParameterSpec:
        self._parameters = with_parameter_enabled(self._parameters, name, enabled)
        logger.info("[DETECTION] Parámetro %s enabled=%s", name, enabled)
        return find_parameter(self._parameters, name)

    # ------------------------------------------------------------------
    # Análisis
    # ------------------------------------------------------------------

    def analyze(
        self,
        current: SensorReading,
        history: Iterable[SensorReading] = (),
    ) -> list[DetectionResult]:
        """Analiza ``current`` usando ``history`` como contexto.

        Devuelve un resultado por parámetro activo, en el orden de los
        ParameterSpec. Sin parámetros activos devuelve lista vacía.
        """
        window = SlidingWindowBuffer.from_history(
            history, max_points=self._adjuster.config.window_points
        )
        return self._analyze_window(self._ensemble, self._parameters, current, window)

    def analyze_parameter(
        self,
        name: str,
        current: SensorReading,
        history: Iterable[SensorReading] = (),
    ) -> DetectionResult:
        """Analiza un único parámetro por nombre.

        Raises:
            UnknownParameterError: si ``name`` no es un parámetro conocido.
        """
        spec = find_parameter(self._parameters, name)
        ensemble = self._ensemble
        window = SlidingWindowBuffer.from_history(
            history, max_points=self._adjuster.config.window_points
        )
        prediction = ensemble.predict_parameter(spec, current)
        return self._to_result(spec.name, prediction, current, window, self._clock())

    def batch_analyze(self, readings: Iterable[SensorReading]) -> list[list[DetectionResult]]:
        """Analiza cada lectura con las anteriores como historial.

        ``batch_analyze(rs)[i] == analyze(rs[i], rs[:i])``. La ventana de
        historial se mantiene deslizante entre pasos.
        """
        ensemble = self._ensemble
        parameters = self._parameters
        window = SlidingWindowBuffer(max_points=self._adjuster.config.window_points)

        batch: list[list[DetectionResult]] = []
        for reading in readings:
            batch.append(self._analyze_window(ensemble, parameters, reading, window))
            window.add_reading(reading)

        logger.debug("[DETECTION] Batch analizado lecturas=%d", len(batch))
        return batch

    def get_fault_statistics(self, results: Iterable[DetectionResult]) -> FaultStatistics:
        return compute_fault_statistics(results)

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _analyze_window(
        self,
        ensemble: RuleEnsemble,
        parameters: Sequence[ParameterSpec],
        current: SensorReading,
        window: SlidingWindowBuffer,
    ) -> list[DetectionResult]:
        timestamp = self._clock()
        predictions = ensemble.predict(current, parameters)
        return [
            self._to_result(name, prediction, current, window, timestamp)
            for name, prediction in predictions.items()
        ]

    def _to_result(
        self,
        parameter: str,
        prediction: Prediction,
        current: SensorReading,
        window: SlidingWindowBuffer,
        timestamp: datetime,
    ) -> DetectionResult:
        value = current.value_of(parameter)
        confidence = self._adjuster.adjust(parameter, prediction.confidence, value, window)
        return DetectionResult(
            parameter=parameter,
            status=prediction.status,
            confidence=round_for_display(confidence),
            recommendation=build_recommendation(parameter, prediction.status, value),
            timestamp=timestamp,
        )
