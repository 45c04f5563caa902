"""Endpoint de estadísticas de fallas sobre resultados almacenados."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ml_service.models.detection import DetectionStatus
from ml_service.repository.detection_repository import InMemoryDetectionRepository
from ml_service.statistics.fault_statistics import compute_fault_statistics
from ml_service.statistics.time_statistics import (
    average_faults_per_day,
    compute_daily_statistics,
    compute_parameter_trends,
    compute_trend_direction,
)

from ..dependencies import get_repository

router = APIRouter(prefix="/ai", tags=["statistics"])
logger = logging.getLogger(__name__)


def _as_utc(ts: datetime) -> datetime:
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


@router.get("/statistics")
def get_statistics(
    limit: int = Query(default=100, ge=1, le=10_000),
    parameter: Optional[str] = None,
    status: Optional[DetectionStatus] = None,
    days: int = Query(default=7, ge=1, le=365),
    repository: InMemoryDetectionRepository = Depends(get_repository),
):
    """Resumen de fallas de los últimos ``days`` días.

    Se toman los ``limit`` resultados más recientes (filtrados por
    ``parameter``) y sobre ellos se aplican rango de fechas y ``status``.
    Resumen, buckets diarios y tendencias salen del mismo conjunto.
    """
    now = datetime.now(timezone.utc)
    since = now - timedelta(days=days)

    stored = repository.list_recent(limit=limit, parameter=parameter)
    in_range = [
        r
        for r in stored
        if _as_utc(r.timestamp) >= since and (status is None or r.status == status)
    ]
    summary = compute_fault_statistics(in_range)
    daily = compute_daily_statistics(in_range, days=days, now=now)
    trends = compute_parameter_trends(in_range, now=now)

    return {
        "success": True,
        "statistics": summary.to_dict(),
        "daily_stats": [d.to_dict() for d in daily],
        "average_faults_per_day": average_faults_per_day(daily, days),
        "trend_direction": compute_trend_direction(daily),
        "parameter_trends": {name: t.to_dict() for name, t in trends.items()},
        "period": {
            "days": days,
            "start": since.isoformat(),
            "end": now.isoformat(),
        },
    }
