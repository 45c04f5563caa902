"""Endpoint de análisis por lotes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from ml_service.repository.detection_repository import InMemoryDetectionRepository
from ml_service.services.fault_detection_service import FaultDetectionService

from ..dependencies import get_repository, get_service
from ..schemas import BatchAnalyzeRequest, BatchAnalyzeResponse, DetectionResultOut

router = APIRouter(prefix="/ai", tags=["analysis"])
logger = logging.getLogger(__name__)


@router.post("/batch-analyze", response_model=BatchAnalyzeResponse)
def batch_analyze(
    payload: BatchAnalyzeRequest,
    service: FaultDetectionService = Depends(get_service),
    repository: InMemoryDetectionRepository = Depends(get_repository),
):
    """Analiza cada punto usando los anteriores como historial.

    Solo persiste si ``saveResults`` es true.
    """
    try:
        batch = service.batch_analyze([p.to_reading() for p in payload.data_points])
        if payload.save_results:
            batch = [repository.save_many(results) for results in batch]
        all_results = [r for results in batch for r in results]
        statistics = service.get_fault_statistics(all_results)
    except Exception as e:
        logger.exception("[API] Error en /ai/batch-analyze err=%s", type(e).__name__)
        raise HTTPException(
            status_code=500, detail="Internal server error during batch AI analysis"
        )

    logger.info(
        "[API] Batch analizado puntos=%d detecciones=%d guardado=%s",
        len(batch),
        len(all_results),
        payload.save_results,
    )
    return BatchAnalyzeResponse(
        batch_results=[[DetectionResultOut.from_result(r) for r in results] for results in batch],
        statistics=statistics.to_dict(),
        total_data_points=len(payload.data_points),
        total_detections=len(all_results),
        timestamp=datetime.now(timezone.utc),
    )
