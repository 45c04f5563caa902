"""Endpoints para activar o desactivar parámetros clasificados."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ml_service.models.detection import ParameterSpec
from ml_service.services.fault_detection_service import FaultDetectionService

from ..dependencies import get_service
from ..schemas import ParameterOut, ParameterToggleIn

router = APIRouter(prefix="/ai", tags=["model"])


def _to_out(spec: ParameterSpec) -> ParameterOut:
    return ParameterOut(
        name=spec.name,
        display_name=spec.display_name,
        description=spec.description,
        weight=spec.weight,
        enabled=spec.enabled,
    )


@router.get("/parameters", response_model=list[ParameterOut])
def list_parameters(service: FaultDetectionService = Depends(get_service)):
    return [_to_out(spec) for spec in service.parameters]


@router.put("/parameters/{name}", response_model=ParameterOut)
def toggle_parameter(
    name: str,
    payload: ParameterToggleIn,
    service: FaultDetectionService = Depends(get_service),
):
    """Un nombre desconocido termina en 404 vía el handler de main."""
    return _to_out(service.set_parameter_enabled(name, payload.enabled))
