from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from common.config import Settings, get_settings
from ml_service.config.ml_config import ForestConfig, HistoryConfig
from ml_service.errors import ModelConfigError, UnknownParameterError
from ml_service.repository.detection_repository import InMemoryDetectionRepository
from ml_service.services.fault_detection_service import FaultDetectionService
from ml_service.validation.reading_validator import ReadingValidator

from .endpoints import (
    analyze_router,
    batch_analyze_router,
    health_router,
    model_router,
    parameters_router,
    statistics_router,
    validation_router,
)

logger = logging.getLogger(__name__)


def _build_service(settings: Settings) -> FaultDetectionService:
    model = ForestConfig(
        n_estimators=settings.n_estimators,
        max_depth=settings.max_depth,
        threshold=settings.threshold,
    )
    history = HistoryConfig(
        window_points=settings.history_window,
        min_points=settings.min_history,
    )
    return FaultDetectionService(model=model, history=history)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Construye la app con su propio servicio, almacén y validador."""
    settings = settings or get_settings()

    app = FastAPI(title="Fault Detection Service", version="1.0.0")
    app.state.settings = settings
    app.state.detection_service = _build_service(settings)
    app.state.detection_repository = InMemoryDetectionRepository(settings.results_capacity)
    app.state.reading_validator = ReadingValidator()

    @app.exception_handler(UnknownParameterError)
    async def _unknown_parameter(request: Request, exc: UnknownParameterError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ModelConfigError)
    async def _invalid_model(request: Request, exc: ModelConfigError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    app.include_router(health_router)
    app.include_router(analyze_router)
    app.include_router(batch_analyze_router)
    app.include_router(model_router)
    app.include_router(parameters_router)
    app.include_router(statistics_router)
    app.include_router(validation_router)

    logger.info(
        "[API] App lista n_estimators=%d history_window=%d capacity=%d",
        settings.n_estimators,
        settings.history_window,
        settings.results_capacity,
    )
    return app


app = create_app()
