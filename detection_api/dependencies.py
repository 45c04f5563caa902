"""Dependencias FastAPI.

El servicio y el almacén viven en ``app.state``: un contexto explícito por
aplicación en lugar de un singleton de proceso.
"""

from __future__ import annotations

from fastapi import Request

from ml_service.repository.detection_repository import InMemoryDetectionRepository
from ml_service.services.fault_detection_service import FaultDetectionService
from ml_service.validation.reading_validator import ReadingValidator


def get_service(request: Request) -> FaultDetectionService:
    return request.app.state.detection_service


def get_repository(request: Request) -> InMemoryDetectionRepository:
    return request.app.state.detection_repository


def get_validator(request: Request) -> ReadingValidator:
    return request.app.state.reading_validator
