"""Endpoints de configuración del modelo."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ml_service.config.ml_config import ForestConfig
from ml_service.models.metadata import RULE_FOREST
from ml_service.services.fault_detection_service import FaultDetectionService

from ..dependencies import get_service
from ..schemas import ModelResponse, ModelUpdateRequest

router = APIRouter(prefix="/ai", tags=["model"])
logger = logging.getLogger(__name__)


def _metadata() -> dict:
    return {
        "name": RULE_FOREST.name,
        "model_type": RULE_FOREST.model_type,
        "version": RULE_FOREST.version,
        "trained": RULE_FOREST.trained,
    }


@router.get("/model", response_model=ModelResponse)
def get_model(service: FaultDetectionService = Depends(get_service)):
    return ModelResponse(model=service.get_model().to_dict(), metadata=_metadata())


@router.put("/model", response_model=ModelResponse)
def update_model(
    payload: ModelUpdateRequest,
    service: FaultDetectionService = Depends(get_service),
):
    """Reconfigura el ensamble. Un ModelConfigError se traduce a 400 en main."""
    params = payload.model.parameters
    config = ForestConfig(
        model_type=payload.model.type,
        n_estimators=params.n_estimators,
        max_depth=params.max_depth,
        threshold=params.threshold,
    )
    updated = service.update_model(config)
    return ModelResponse(
        model=updated.to_dict(),
        metadata=_metadata(),
        message="AI model configuration updated successfully",
    )
