"""Motor de votación del ensamble de reglas.

Para cada parámetro activo, cada regla asignada a ese parámetro emite un
voto (estado + confianza). El estado ganador sale por mayoría y la
confianza combina la proporción de votos con la confianza media.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping

from ml_service.config.ml_config import ForestConfig
from ml_service.models.detection import (
    CLASSIFIED_PARAMETERS,
    DetectionStatus,
    ParameterSpec,
    SensorReading,
)
from ml_service.utils.numeric_precision import CONFIDENCE_FLOOR, clamp_confidence

from .decision_rules import DecisionRule, build_rules

logger = logging.getLogger(__name__)

VOTE_RATIO_WEIGHT = 0.6
MEAN_CONFIDENCE_WEIGHT = 0.4


@dataclass(frozen=True)
class EnsembleVote:
    """Recuento de votos de las reglas de un parámetro."""

    parameter: str
    normal: int
    warning: int
    critical: int
    mean_confidence: float

    @property
    def rule_count(self) -> int:
        return self.normal + self.warning + self.critical

    def winner(self) -> tuple[DetectionStatus, int]:
        """Estado ganador y sus votos.

        Arranca en NORMAL; WARNING solo gana con más votos estrictos y
        CRITICAL solo si supera estrictamente al máximo vigente. En empate
        se queda el estado evaluado primero.
        """
        status, max_votes = DetectionStatus.NORMAL, self.normal
        if self.warning > max_votes:
            status, max_votes = DetectionStatus.WARNING, self.warning
        if self.critical > max_votes:
            status, max_votes = DetectionStatus.CRITICAL, self.critical
        return status, max_votes


@dataclass(frozen=True)
class Prediction:
    status: DetectionStatus
    confidence: float


class RuleEnsemble:
    """Ensamble inmutable de reglas construido desde un ForestConfig.

    Reconfigurar significa construir otro ensamble; nunca se muta uno
    existente, así que una referencia tomada al inicio de un análisis es
    estable durante todo el cálculo.
    """

    def __init__(self, config: ForestConfig) -> None:
        self._config = config
        self._rules = build_rules(config.n_estimators)

        grouped: Dict[str, list[DecisionRule]] = {p: [] for p in CLASSIFIED_PARAMETERS}
        for rule in self._rules:
            grouped[rule.parameter].append(rule)
        self._by_parameter: Mapping[str, tuple[DecisionRule, ...]] = {
            p: tuple(rules) for p, rules in grouped.items()
        }

        logger.debug(
            "[FOREST] Ensamble construido n_estimators=%d reglas_por_parametro=%s",
            config.n_estimators,
            {p: len(r) for p, r in self._by_parameter.items()},
        )

    @property
    def config(self) -> ForestConfig:
        return self._config

    @property
    def rules(self) -> tuple[DecisionRule, ...]:
        return self._rules

    def rules_for(self, parameter: str) -> tuple[DecisionRule, ...]:
        return self._by_parameter.get(parameter, ())

    def vote(self, parameter: str, value: float) -> EnsembleVote:
        counts = {status: 0 for status in DetectionStatus}
        total_confidence = 0.0
        rules = self.rules_for(parameter)
        for rule in rules:
            leaf = rule.evaluate(value)
            counts[leaf.status] += 1
            total_confidence += leaf.confidence

        return EnsembleVote(
            parameter=parameter,
            normal=counts[DetectionStatus.NORMAL],
            warning=counts[DetectionStatus.WARNING],
            critical=counts[DetectionStatus.CRITICAL],
            mean_confidence=total_confidence / len(rules) if rules else 0.0,
        )

    def predict_parameter(self, spec: ParameterSpec, reading: SensorReading) -> Prediction:
        vote = self.vote(spec.name, reading.value_of(spec.name))
        if vote.rule_count == 0:
            # n_estimators < 4: el parámetro no tiene reglas asignadas
            return Prediction(DetectionStatus.NORMAL, CONFIDENCE_FLOOR)

        status, max_votes = vote.winner()
        vote_ratio = max_votes / vote.rule_count
        confidence = (
            vote_ratio * VOTE_RATIO_WEIGHT + vote.mean_confidence * MEAN_CONFIDENCE_WEIGHT
        ) * spec.weight
        return Prediction(status, clamp_confidence(confidence))

    def predict(
        self, reading: SensorReading, specs: Iterable[ParameterSpec]
    ) -> Dict[str, Prediction]:
        """Predicción por parámetro activo, en el orden de ``specs``."""
        return {
            spec.name: self.predict_parameter(spec, reading)
            for spec in specs
            if spec.enabled
        }
