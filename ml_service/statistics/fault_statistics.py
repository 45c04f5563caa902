"""Agregados de resultados de detección para dashboards.

Reducciones puras sobre una lista de DetectionResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

from ml_service.models.detection import DetectionResult, DetectionStatus


@dataclass(frozen=True)
class ParameterCounts:
    critical: int = 0
    warning: int = 0
    normal: int = 0

    @property
    def total(self) -> int:
        return self.critical + self.warning + self.normal

    def to_dict(self) -> dict:
        return {"critical": self.critical, "warning": self.warning, "normal": self.normal}


@dataclass(frozen=True)
class FaultStatistics:
    """Conteos por estado, confianza media y desglose por parámetro.

    ``total_faults`` cuenta solo warning + critical; ``total_results`` es
    el tamaño de la lista reducida.
    """

    total_results: int = 0
    total_faults: int = 0
    critical_faults: int = 0
    warning_faults: int = 0
    normal_readings: int = 0
    average_confidence: float = 0.0
    faults_by_parameter: Dict[str, ParameterCounts] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_results": self.total_results,
            "total_faults": self.total_faults,
            "critical_faults": self.critical_faults,
            "warning_faults": self.warning_faults,
            "normal_readings": self.normal_readings,
            "average_confidence": self.average_confidence,
            "faults_by_parameter": {
                name: counts.to_dict() for name, counts in self.faults_by_parameter.items()
            },
        }


def compute_fault_statistics(results: Iterable[DetectionResult]) -> FaultStatistics:
    results = list(results)
    if not results:
        return FaultStatistics()

    by_status = {status: 0 for status in DetectionStatus}
    by_parameter: Dict[str, Dict[DetectionStatus, int]] = {}
    total_confidence = 0.0

    for result in results:
        status = DetectionStatus(result.status)
        total_confidence += result.confidence
        by_status[status] += 1
        bucket = by_parameter.setdefault(result.parameter, {s: 0 for s in DetectionStatus})
        bucket[status] += 1

    critical = by_status[DetectionStatus.CRITICAL]
    warning = by_status[DetectionStatus.WARNING]

    return FaultStatistics(
        total_results=len(results),
        total_faults=critical + warning,
        critical_faults=critical,
        warning_faults=warning,
        normal_readings=by_status[DetectionStatus.NORMAL],
        average_confidence=total_confidence / len(results),
        faults_by_parameter={
            name: ParameterCounts(
                critical=counts[DetectionStatus.CRITICAL],
                warning=counts[DetectionStatus.WARNING],
                normal=counts[DetectionStatus.NORMAL],
            )
            for name, counts in by_parameter.items()
        },
    )
