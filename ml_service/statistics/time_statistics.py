"""Estadísticas temporales sobre resultados almacenados.

Usadas por el endpoint de estadísticas: buckets diarios, dirección de la
tendencia de fallas y tendencia por parámetro (últimas 24h vs 24h previas).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Literal, Optional, Sequence

from ml_service.models.detection import CLASSIFIED_PARAMETERS, DetectionResult, DetectionStatus
from ml_service.utils.numeric_precision import round_for_display

from .fault_statistics import FaultStatistics, compute_fault_statistics

FaultTrend = Literal["increasing", "decreasing", "stable"]
TrendDirection = Literal["increasing", "decreasing", "stable", "insufficient_data"]

INCREASE_RATIO = 1.2
DECREASE_RATIO = 0.8


@dataclass(frozen=True)
class DailyStatistics:
    date: str
    statistics: FaultStatistics

    def to_dict(self) -> dict:
        return {"date": self.date, **self.statistics.to_dict()}


@dataclass(frozen=True)
class ParameterTrend:
    trend: FaultTrend
    confidence: float
    recent_faults: int
    total_detections: int = 0
    critical_count: int = 0
    warning_count: int = 0

    def to_dict(self) -> dict:
        return {
            "trend": self.trend,
            "confidence": self.confidence,
            "recent_faults": self.recent_faults,
            "total_detections": self.total_detections,
            "critical_count": self.critical_count,
            "warning_count": self.warning_count,
        }


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def _compare(recent: float, previous: float) -> FaultTrend:
    if recent > previous * INCREASE_RATIO:
        return "increasing"
    if recent < previous * DECREASE_RATIO:
        return "decreasing"
    return "stable"


def compute_daily_statistics(
    results: Iterable[DetectionResult],
    days: int,
    now: Optional[datetime] = None,
) -> list[DailyStatistics]:
    """Un bucket por día, del más antiguo al más reciente."""
    now = _as_utc(now or datetime.now(timezone.utc))
    results = list(results)
    day = timedelta(days=1)

    daily: list[DailyStatistics] = []
    for i in range(days):
        start = now - (i + 1) * day
        end = now - i * day
        in_day = [r for r in results if start <= _as_utc(r.timestamp) < end]
        daily.insert(
            0,
            DailyStatistics(
                date=start.date().isoformat(),
                statistics=compute_fault_statistics(in_day),
            ),
        )
    return daily


def compute_trend_direction(daily: Sequence[DailyStatistics]) -> TrendDirection:
    if len(daily) < 3:
        return "insufficient_data"

    recent = daily[-3:]
    earlier = daily[:3]
    recent_avg = sum(d.statistics.total_faults for d in recent) / len(recent)
    earlier_avg = sum(d.statistics.total_faults for d in earlier) / len(earlier)
    return _compare(recent_avg, earlier_avg)


def average_faults_per_day(daily: Sequence[DailyStatistics], days: int) -> float:
    if days <= 0:
        return 0.0
    return sum(d.statistics.total_faults for d in daily) / days


def compute_parameter_trends(
    results: Iterable[DetectionResult],
    now: Optional[datetime] = None,
    parameters: Sequence[str] = CLASSIFIED_PARAMETERS,
) -> dict[str, ParameterTrend]:
    now = _as_utc(now or datetime.now(timezone.utc))
    results = list(results)
    last_24h = now - timedelta(hours=24)
    last_48h = now - timedelta(hours=48)

    trends: dict[str, ParameterTrend] = {}
    for parameter in parameters:
        param_results = [r for r in results if r.parameter == parameter]
        if not param_results:
            trends[parameter] = ParameterTrend(trend="stable", confidence=0.0, recent_faults=0)
            continue

        recent_faults = sum(
            1
            for r in param_results
            if _as_utc(r.timestamp) > last_24h and r.status != DetectionStatus.NORMAL
        )
        previous_faults = sum(
            1
            for r in param_results
            if last_48h < _as_utc(r.timestamp) <= last_24h and r.status != DetectionStatus.NORMAL
        )

        avg_confidence = sum(r.confidence for r in param_results) / len(param_results)
        trends[parameter] = ParameterTrend(
            trend=_compare(recent_faults, previous_faults),
            confidence=round_for_display(avg_confidence),
            recent_faults=recent_faults,
            total_detections=len(param_results),
            critical_count=sum(1 for r in param_results if r.status == DetectionStatus.CRITICAL),
            warning_count=sum(1 for r in param_results if r.status == DetectionStatus.WARNING),
        )
    return trends
