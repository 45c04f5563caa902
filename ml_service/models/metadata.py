from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelMetadata:
    """Metadatos del clasificador expuestos junto a su configuración."""

    name: str
    model_type: str
    version: str
    trained: bool


# Reglas fijas parametrizadas por índice; no hay entrenamiento con datos.
RULE_FOREST = ModelMetadata(
    name="rule_forest_fault_classifier",
    model_type="rule_ensemble",
    version="1.0.0",
    trained=False,
)
