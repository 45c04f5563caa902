"""CLI para analizar un archivo JSON de lecturas.

Uso:
    python -m jobs.batch_analyze lecturas.json [--validate] [--n-estimators 50]

El archivo contiene una lista de lecturas (camelCase o snake_case). Cada
lectura se analiza con las anteriores como historial y al final se
imprimen las estadísticas de fallas en JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from common.config import get_settings
from ml_service.config.ml_config import ForestConfig, HistoryConfig
from ml_service.errors import ModelConfigError
from ml_service.models.detection import DetectionStatus, SensorReading
from ml_service.services.fault_detection_service import FaultDetectionService
from ml_service.statistics.fault_statistics import FaultStatistics
from ml_service.validation.reading_validator import ReadingValidator

logger = logging.getLogger(__name__)


def load_readings(path: Path) -> list[SensorReading]:
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("dataPoints", [])
    if not isinstance(data, list):
        raise ValueError("expected a JSON list of readings")
    return [SensorReading.from_mapping(item) for item in data]


def run(
    readings: Sequence[SensorReading],
    service: FaultDetectionService,
    validator: Optional[ReadingValidator] = None,
) -> FaultStatistics:
    """Valida (opcional), analiza el lote y devuelve las estadísticas."""
    if validator is not None:
        summary = validator.summarize(readings)
        logger.info(
            "[VALIDATE] validas=%d invalidas=%d tasa=%.1f%%",
            summary.valid_points,
            summary.invalid_points,
            summary.validation_rate,
        )
        for issue in summary.common_issues:
            logger.warning("[VALIDATE] %s", issue)

    batch = service.batch_analyze(readings)
    for i, results in enumerate(batch):
        for r in results:
            if r.status == DetectionStatus.NORMAL:
                continue
            logger.info(
                "[ANALYZE] #%d %s status=%s confidence=%.2f %s",
                i,
                r.parameter,
                r.status.value,
                r.confidence,
                r.recommendation,
            )

    return service.get_fault_statistics(r for results in batch for r in results)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    p = argparse.ArgumentParser(description="Batch fault analysis over a JSON file of readings")
    p.add_argument("path", type=Path)
    p.add_argument("--n-estimators", type=int, default=settings.n_estimators)
    p.add_argument("--history-window", type=int, default=settings.history_window)
    p.add_argument("--validate", action="store_true", help="validate readings before analysis")
    args = p.parse_args(argv)

    try:
        service = FaultDetectionService(
            model=ForestConfig(
                n_estimators=args.n_estimators,
                max_depth=settings.max_depth,
                threshold=settings.threshold,
            ),
            history=HistoryConfig(
                window_points=args.history_window,
                min_points=settings.min_history,
            ),
        )
    except ModelConfigError as e:
        p.error(f"invalid model configuration: {e}")

    try:
        readings = load_readings(args.path)
    except KeyError as e:
        p.error(f"reading is missing field {e.args[0]!r}")
    except (OSError, ValueError) as e:
        p.error(f"cannot load readings from {args.path}: {e}")
    logger.info("[ANALYZE] Lecturas cargadas n=%d archivo=%s", len(readings), args.path)

    stats = run(readings, service, ReadingValidator() if args.validate else None)
    print(json.dumps(stats.to_dict(), indent=2))


if __name__ == "__main__":
    main()
