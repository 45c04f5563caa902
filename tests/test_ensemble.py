"""Tests de la votación del ensamble."""

from dataclasses import replace

import pytest

from ml_service.config.ml_config import ForestConfig
from ml_service.forest.ensemble import EnsembleVote, RuleEnsemble
from ml_service.models.detection import (
    DEFAULT_PARAMETER_SPECS,
    ENGINE_TEMP,
    ENGINE_VIBRATION,
    DetectionStatus,
    find_parameter,
)
from ml_service.utils.numeric_precision import CONFIDENCE_CEIL, CONFIDENCE_FLOOR

TEMP_SPEC = find_parameter(DEFAULT_PARAMETER_SPECS, ENGINE_TEMP)


# =============================================================================
# GANADOR Y DESEMPATE
# =============================================================================

class TestWinner:
    def test_majority_wins(self):
        vote = EnsembleVote("x", normal=1, warning=3, critical=2, mean_confidence=0.8)
        assert vote.winner() == (DetectionStatus.WARNING, 3)

    def test_tie_normal_warning_keeps_normal(self):
        vote = EnsembleVote("x", normal=2, warning=2, critical=0, mean_confidence=0.8)
        assert vote.winner() == (DetectionStatus.NORMAL, 2)

    def test_tie_warning_critical_keeps_warning(self):
        vote = EnsembleVote("x", normal=0, warning=2, critical=2, mean_confidence=0.8)
        assert vote.winner() == (DetectionStatus.WARNING, 2)

    def test_critical_needs_strict_majority_over_normal(self):
        vote = EnsembleVote("x", normal=2, warning=0, critical=2, mean_confidence=0.8)
        assert vote.winner()[0] == DetectionStatus.NORMAL


class TestTieThroughRules:
    """Con 8 reglas la temperatura tiene dos votos (seeds 0 y 168)."""

    @pytest.fixture
    def ensemble(self):
        return RuleEnsemble(ForestConfig(n_estimators=8))

    def test_warning_normal_split(self, ensemble, reading_factory):
        pred = ensemble.predict_parameter(TEMP_SPEC, reading_factory(engine_temp=86))
        assert pred.status == DetectionStatus.NORMAL
        assert pred.confidence == pytest.approx((0.5 * 0.6 + 0.85 * 0.4) * 0.9)

    def test_critical_warning_split(self, ensemble, reading_factory):
        pred = ensemble.predict_parameter(TEMP_SPEC, reading_factory(engine_temp=100))
        assert pred.status == DetectionStatus.WARNING
        assert pred.confidence == pytest.approx((0.5 * 0.6 + 0.875 * 0.4) * 0.9)


# =============================================================================
# CONFIANZA
# =============================================================================

class TestConfidence:
    def test_unanimous_critical(self, reading_factory):
        ensemble = RuleEnsemble(ForestConfig())
        pred = ensemble.predict_parameter(TEMP_SPEC, reading_factory(engine_temp=115))
        assert pred.status == DetectionStatus.CRITICAL
        assert pred.confidence == pytest.approx((0.6 + 0.95 * 0.4) * 0.9)

    @pytest.mark.parametrize("temp", [-40, 0, 86, 92, 100, 150, 400])
    def test_confidence_within_bounds(self, temp, reading_factory):
        ensemble = RuleEnsemble(ForestConfig(n_estimators=37))
        pred = ensemble.predict_parameter(TEMP_SPEC, reading_factory(engine_temp=temp))
        assert CONFIDENCE_FLOOR <= pred.confidence <= CONFIDENCE_CEIL

    def test_parameter_without_rules(self, reading_factory):
        ensemble = RuleEnsemble(ForestConfig(n_estimators=3))
        spec = find_parameter(DEFAULT_PARAMETER_SPECS, ENGINE_VIBRATION)
        assert ensemble.rules_for(ENGINE_VIBRATION) == ()

        pred = ensemble.predict_parameter(spec, reading_factory(engine_vibration=80))
        assert pred.status == DetectionStatus.NORMAL
        assert pred.confidence == CONFIDENCE_FLOOR


class TestPredict:
    def test_only_enabled_parameters_in_order(self, normal_reading):
        specs = list(DEFAULT_PARAMETER_SPECS)
        specs[0] = replace(specs[0], enabled=False)
        out = RuleEnsemble(ForestConfig()).predict(normal_reading, specs)
        assert list(out) == [s.name for s in specs[1:]]

    def test_votes_count_only_assigned_rules(self):
        ensemble = RuleEnsemble(ForestConfig(n_estimators=10))
        # índices 0, 4, 8 son de temperatura
        assert ensemble.vote(ENGINE_TEMP, 85).rule_count == 3
        assert ensemble.vote(ENGINE_VIBRATION, 12).rule_count == 2
