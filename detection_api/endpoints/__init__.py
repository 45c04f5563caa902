"""Módulo de endpoints HTTP.

Contiene todos los endpoints de la API de detección organizados por función.
"""

from .health import router as health_router
from .analyze import router as analyze_router
from .batch_analyze import router as batch_analyze_router
from .model import router as model_router
from .parameters import router as parameters_router
from .statistics import router as statistics_router
from .validation import router as validation_router

__all__ = [
    "health_router",
    "analyze_router",
    "batch_analyze_router",
    "model_router",
    "parameters_router",
    "statistics_router",
    "validation_router",
]
