from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _default_env_file() -> str:
    repo_root = Path(__file__).resolve().parents[1]
    return str(repo_root / ".env")


@dataclass(frozen=True)
class Settings:
    # Modelo de reglas
    n_estimators: int
    max_depth: int
    threshold: float

    # Ajuste por historial
    history_window: int
    min_history: int

    # Almacén de resultados en memoria
    results_capacity: int

    log_level: str


def get_settings() -> Settings:
    # Carga el .env (si existe) sin pisar variables de entorno reales.
    env_file = os.getenv("FAULT_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    return Settings(
        n_estimators=int(os.getenv("FAULT_N_ESTIMATORS", "100")),
        max_depth=int(os.getenv("FAULT_MAX_DEPTH", "10")),
        threshold=float(os.getenv("FAULT_THRESHOLD", "0.7")),
        history_window=int(os.getenv("FAULT_HISTORY_WINDOW", "10")),
        min_history=int(os.getenv("FAULT_MIN_HISTORY", "5")),
        results_capacity=int(os.getenv("FAULT_RESULTS_CAPACITY", "10000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
