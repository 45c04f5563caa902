"""Endpoints de análisis de una lectura."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ml_service.repository.detection_repository import InMemoryDetectionRepository
from ml_service.services.fault_detection_service import FaultDetectionService

from ..dependencies import get_repository, get_service
from ..schemas import AnalyzeRequest, AnalyzeResponse, DetectionListResponse, DetectionResultOut

router = APIRouter(prefix="/ai", tags=["analysis"])
logger = logging.getLogger(__name__)


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    payload: AnalyzeRequest,
    service: FaultDetectionService = Depends(get_service),
    repository: InMemoryDetectionRepository = Depends(get_repository),
):
    """Analiza la lectura actual con su historial y guarda los resultados."""
    try:
        results = service.analyze(
            payload.current_data.to_reading(),
            [r.to_reading() for r in payload.historical_data],
        )
        saved = repository.save_many(results)
    except Exception as e:
        logger.exception("[API] Error en /ai/analyze err=%s", type(e).__name__)
        raise HTTPException(status_code=500, detail="Internal server error during AI analysis")

    return AnalyzeResponse(
        results=[DetectionResultOut.from_result(r) for r in saved],
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/analyze", response_model=DetectionListResponse)
def list_detections(
    limit: int = Query(default=50, ge=1, le=1000),
    parameter: Optional[str] = None,
    repository: InMemoryDetectionRepository = Depends(get_repository),
):
    """Resultados almacenados, más recientes primero."""
    results = repository.list_recent(limit=limit, parameter=parameter)
    return DetectionListResponse(
        results=[DetectionResultOut.from_result(r) for r in results],
        count=len(results),
    )
