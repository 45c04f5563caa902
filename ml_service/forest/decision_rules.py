"""Reglas de decisión del ensamble.

Cada regla es un árbol fijo de dos niveles sobre un solo canal. No se
entrena: los umbrales salen de un seed derivado del índice de la regla
(``index * 42``), lo que da una pequeña dispersión alrededor de un centro.
"""

from __future__ import annotations

from dataclasses import dataclass

from ml_service.models.detection import (
    BATTERY_VOLTAGE,
    CLASSIFIED_PARAMETERS,
    ENGINE_TEMP,
    ENGINE_VIBRATION,
    OIL_PRESSURE,
    DetectionStatus,
)

SEED_MULTIPLIER = 42


@dataclass(frozen=True)
class RuleLeaf:
    status: DetectionStatus
    confidence: float


@dataclass(frozen=True)
class DecisionRule:
    """Árbol de dos niveles: <= lower, <= upper, resto."""

    index: int
    parameter: str
    lower: float
    upper: float
    at_or_below_lower: RuleLeaf
    at_or_below_upper: RuleLeaf
    above_upper: RuleLeaf

    def evaluate(self, value: float) -> RuleLeaf:
        if value <= self.lower:
            return self.at_or_below_lower
        if value <= self.upper:
            return self.at_or_below_upper
        return self.above_upper


_N = DetectionStatus.NORMAL
_W = DetectionStatus.WARNING
_C = DetectionStatus.CRITICAL


def _temperature_rule(index: int, seed: int) -> DecisionRule:
    return DecisionRule(
        index=index,
        parameter=ENGINE_TEMP,
        lower=85.0 + seed % 5,
        upper=95.0 + seed % 10,
        at_or_below_lower=RuleLeaf(_N, 0.90),
        at_or_below_upper=RuleLeaf(_W, 0.80),
        above_upper=RuleLeaf(_C, 0.95),
    )


def _oil_pressure_rule(index: int, seed: int) -> DecisionRule:
    # Invertida respecto a temperatura: presión baja es lo peligroso
    return DecisionRule(
        index=index,
        parameter=OIL_PRESSURE,
        lower=round(1.4 - (seed % 3) * 0.1, 2),
        upper=round(3.0 + (seed % 2) * 0.2, 2),
        at_or_below_lower=RuleLeaf(_C, 0.90),
        at_or_below_upper=RuleLeaf(_W, 0.75),
        above_upper=RuleLeaf(_N, 0.85),
    )


def _battery_voltage_rule(index: int, seed: int) -> DecisionRule:
    # Por encima de la banda de carga también se marca
    return DecisionRule(
        index=index,
        parameter=BATTERY_VOLTAGE,
        lower=round(11.5 + (seed % 2) * 0.2, 2),
        upper=round(13.8 + (seed % 3) * 0.1, 2),
        at_or_below_lower=RuleLeaf(_C, 0.88),
        at_or_below_upper=RuleLeaf(_N, 0.82),
        above_upper=RuleLeaf(_W, 0.78),
    )


def _vibration_rule(index: int, seed: int) -> DecisionRule:
    return DecisionRule(
        index=index,
        parameter=ENGINE_VIBRATION,
        lower=15.0 + seed % 5,
        upper=25.0 + seed % 3,
        at_or_below_lower=RuleLeaf(_N, 0.85),
        at_or_below_upper=RuleLeaf(_W, 0.80),
        above_upper=RuleLeaf(_C, 0.92),
    )


_BUILDERS = {
    ENGINE_TEMP: _temperature_rule,
    OIL_PRESSURE: _oil_pressure_rule,
    BATTERY_VOLTAGE: _battery_voltage_rule,
    ENGINE_VIBRATION: _vibration_rule,
}


def build_rule(index: int) -> DecisionRule:
    """Construye la regla ``index``; el parámetro rota con ``index % 4``."""
    if index < 0:
        raise ValueError(f"rule index must be >= 0, got {index}")
    parameter = CLASSIFIED_PARAMETERS[index % len(CLASSIFIED_PARAMETERS)]
    return _BUILDERS[parameter](index, index * SEED_MULTIPLIER)


def build_rules(n_estimators: int) -> tuple[DecisionRule, ...]:
    return tuple(build_rule(i) for i in range(n_estimators))
