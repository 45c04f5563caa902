from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from ml_service.errors import ModelConfigError


ModelType = Literal["RandomForest"]

N_ESTIMATORS_RANGE = (1, 1000)
MAX_DEPTH_RANGE = (1, 50)
THRESHOLD_RANGE = (0.0, 1.0)


@dataclass(frozen=True)
class ForestConfig:
    """Configuración del ensamble de reglas ("Random Forest").

    Solo ``n_estimators`` cambia la salida: define cuántas reglas se
    construyen. ``max_depth`` y ``threshold`` se validan y se conservan,
    pero las reglas fijas de dos niveles no los consumen.
    """

    model_type: ModelType = "RandomForest"
    n_estimators: int = 100
    max_depth: int = 10
    threshold: float = 0.7

    def __post_init__(self) -> None:
        if self.model_type != "RandomForest":
            raise ModelConfigError("Only RandomForest model type is supported")
        _check_int("n_estimators", self.n_estimators, N_ESTIMATORS_RANGE)
        _check_int("max_depth", self.max_depth, MAX_DEPTH_RANGE)

        lo, hi = THRESHOLD_RANGE
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
            raise ModelConfigError("threshold must be a number between 0 and 1")
        if not (lo <= float(self.threshold) <= hi):
            raise ModelConfigError("threshold must be a number between 0 and 1")

    def with_updates(self, **changes) -> "ForestConfig":
        """Devuelve una copia validada con los cambios aplicados."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "type": self.model_type,
            "parameters": {
                "nEstimators": self.n_estimators,
                "maxDepth": self.max_depth,
                "threshold": self.threshold,
            },
        }


def _check_int(name: str, value, bounds: tuple[int, int]) -> None:
    lo, hi = bounds
    if isinstance(value, bool) or not isinstance(value, int):
        raise ModelConfigError(f"{name} must be an integer between {lo} and {hi}")
    if not (lo <= value <= hi):
        raise ModelConfigError(f"{name} must be an integer between {lo} and {hi}")


@dataclass(frozen=True)
class HistoryConfig:
    """Heurísticos del ajuste de confianza por historial.

    Estos valores son heurísticos y se pueden ajustar según dominio.
    """

    # Nº de lecturas históricas más recientes que se miran
    window_points: int = 10

    # Nº mínimo de lecturas históricas para aplicar el ajuste
    min_points: int = 5

    # Fracción del rango total del canal que se tolera como dispersión
    variance_range_ratio: float = 0.1

    # Pendiente (valor/lectura) por encima de la cual la serie tiene tendencia
    slope_threshold: float = 0.1

    unstable_factor: float = 0.9
    trending_factor: float = 0.95
    abnormal_boost: float = 1.1

    def __post_init__(self) -> None:
        if self.window_points < 1:
            raise ModelConfigError("window_points must be >= 1")
        if self.min_points < 0:
            raise ModelConfigError("min_points must be >= 0")
        if self.min_points > self.window_points:
            raise ModelConfigError("min_points must be <= window_points")

