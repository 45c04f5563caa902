"""Endpoint de validación de lecturas."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ml_service.validation.reading_validator import ReadingValidator

from ..dependencies import get_validator
from ..schemas import ValidateRequest

router = APIRouter(tags=["sensors"])


@router.post("/sensors/validate")
def validate_readings(
    payload: ValidateRequest,
    validator: ReadingValidator = Depends(get_validator),
):
    readings = [p.to_reading() for p in payload.data_points]
    reports = validator.validate_batch(readings)
    summary = validator.summarize(readings)
    return {
        "success": True,
        "reports": [r.to_dict() for r in reports],
        "summary": summary.to_dict(),
    }
