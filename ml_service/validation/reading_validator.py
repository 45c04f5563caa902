"""Validador de lecturas del motor.

Responsabilidades:
- Validar que cada canal esté dentro de su rango total (SensorRange)
- Asignar severidad según la banda crítica del canal
- Detectar combinaciones inconsistentes entre canales
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, Literal, Mapping, Optional, Sequence

from ml_service.models.detection import (
    BATTERY_VOLTAGE,
    ENGINE_RPM,
    ENGINE_TEMP,
    ENGINE_VIBRATION,
    OIL_PRESSURE,
    SensorReading,
)
from ml_service.models.sensor_ranges import DEFAULT_SENSOR_RANGES, SensorRange

logger = logging.getLogger(__name__)

Severity = Literal["info", "warning", "error", "critical"]


@dataclass(frozen=True)
class ValidationResult:
    rule: str
    is_valid: bool
    message: str
    severity: Severity
    parameter: Optional[str] = None
    value: Optional[float] = None
    expected_range: Optional[tuple[float, float]] = None

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "is_valid": self.is_valid,
            "message": self.message,
            "severity": self.severity,
            "parameter": self.parameter,
            "value": self.value,
            "expected_range": list(self.expected_range) if self.expected_range else None,
        }


@dataclass(frozen=True)
class ValidationReport:
    is_valid: bool
    results: list[ValidationResult]
    total: int
    passed: int
    warnings: int
    errors: int
    critical: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "results": [r.to_dict() for r in self.results],
            "summary": {
                "total": self.total,
                "passed": self.passed,
                "warnings": self.warnings,
                "errors": self.errors,
                "critical": self.critical,
            },
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ValidationSummary:
    total_points: int
    valid_points: int
    invalid_points: int
    validation_rate: float  # porcentaje
    common_issues: list[str]

    def to_dict(self) -> dict:
        return {
            "total_points": self.total_points,
            "valid_points": self.valid_points,
            "invalid_points": self.invalid_points,
            "validation_rate": self.validation_rate,
            "common_issues": self.common_issues,
        }


Rule = Callable[[SensorReading, Mapping[str, SensorRange]], ValidationResult]


def _range_rule(
    name: str,
    parameter: str,
    label: str,
    is_severe: Callable[[float, SensorRange], bool],
    severe: Severity,
    mild: Severity,
) -> Rule:
    def rule(reading: SensorReading, ranges: Mapping[str, SensorRange]) -> ValidationResult:
        rng = ranges[parameter]
        value = reading.value_of(parameter)
        ok = not rng.violates(value)
        if ok:
            message = f"{label} within valid range"
        else:
            message = (
                f"{label} {value:g}{rng.unit} outside valid range "
                f"({rng.min_value:g}-{rng.max_value:g}{rng.unit})"
            )
        return ValidationResult(
            rule=name,
            is_valid=ok,
            message=message,
            severity=severe if is_severe(value, rng) else mild,
            parameter=parameter,
            value=value,
            expected_range=(rng.min_value, rng.max_value),
        )

    rule.__name__ = name
    return rule


def consistency_rule(reading: SensorReading, ranges: Mapping[str, SensorRange]) -> ValidationResult:
    """Combinaciones poco plausibles entre canales."""
    issues: list[str] = []
    if reading.engine_temp > 100 and reading.oil_pressure > 3:
        issues.append("High engine temperature with normal oil pressure - check cooling system")
    if reading.battery_voltage < 12 and reading.engine_rpm > 3000:
        issues.append("Low battery voltage at high RPM - check alternator")
    if reading.engine_vibration > 40 and reading.engine_rpm < 2000:
        issues.append("High vibration at normal RPM - check engine mounts")

    return ValidationResult(
        rule="data_consistency",
        is_valid=not issues,
        message="; ".join(issues) if issues else "Data consistency check passed",
        severity="warning",
    )


DEFAULT_RULES: tuple[Rule, ...] = (
    _range_rule(
        "engine_temp_range", ENGINE_TEMP, "Engine temperature",
        lambda v, r: r.critical.contains(v), "critical", "error",
    ),
    _range_rule(
        "oil_pressure_range", OIL_PRESSURE, "Oil pressure",
        lambda v, r: v <= r.critical.max_value, "critical", "error",
    ),
    _range_rule(
        "battery_voltage_range", BATTERY_VOLTAGE, "Battery voltage",
        lambda v, r: v <= r.critical.max_value, "critical", "error",
    ),
    _range_rule(
        "engine_vibration_range", ENGINE_VIBRATION, "Engine vibration",
        lambda v, r: v >= r.critical.min_value, "critical", "warning",
    ),
    _range_rule(
        "rpm_range", ENGINE_RPM, "RPM",
        lambda v, r: v >= r.critical.min_value, "warning", "info",
    ),
    consistency_rule,
)


class ReadingValidator:
    """Valida lecturas antes de analizarlas.

    No bloquea el análisis: el reporte se devuelve al llamador para que
    decida (el endpoint lo expone, el CLI lo loguea).
    """

    def __init__(
        self,
        ranges: Optional[Mapping[str, SensorRange]] = None,
        rules: Sequence[Rule] = DEFAULT_RULES,
    ) -> None:
        self._ranges = DEFAULT_SENSOR_RANGES if ranges is None else ranges
        self._rules = tuple(rules)

    @property
    def rule_names(self) -> list[str]:
        return [rule.__name__ for rule in self._rules]

    def validate(self, reading: SensorReading) -> ValidationReport:
        results = [rule(reading, self._ranges) for rule in self._rules]
        failed = [r for r in results if not r.is_valid]

        errors = sum(1 for r in failed if r.severity == "error")
        critical = sum(1 for r in failed if r.severity == "critical")
        return ValidationReport(
            is_valid=errors == 0 and critical == 0,
            results=results,
            total=len(results),
            passed=len(results) - len(failed),
            warnings=sum(1 for r in failed if r.severity == "warning"),
            errors=errors,
            critical=critical,
        )

    def validate_batch(self, readings: Iterable[SensorReading]) -> list[ValidationReport]:
        return [self.validate(r) for r in readings]

    def summarize(self, readings: Iterable[SensorReading]) -> ValidationSummary:
        reports = self.validate_batch(readings)
        valid = sum(1 for r in reports if r.is_valid)

        issues: Counter[str] = Counter(
            result.message
            for report in reports
            for result in report.results
            if not result.is_valid
        )
        return ValidationSummary(
            total_points=len(reports),
            valid_points=valid,
            invalid_points=len(reports) - valid,
            validation_rate=(valid / len(reports)) * 100 if reports else 0.0,
            common_issues=[message for message, _ in issues.most_common(5)],
        )
