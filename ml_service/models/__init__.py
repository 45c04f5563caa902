from .detection import (
    CLASSIFIED_PARAMETERS,
    DEFAULT_PARAMETER_SPECS,
    DetectionResult,
    DetectionStatus,
    ParameterSpec,
    SensorReading,
)
from .metadata import RULE_FOREST, ModelMetadata
from .sensor_ranges import DEFAULT_SENSOR_RANGES, Band, SensorRange

__all__ = [
    "CLASSIFIED_PARAMETERS",
    "DEFAULT_PARAMETER_SPECS",
    "DetectionResult",
    "DetectionStatus",
    "ParameterSpec",
    "SensorReading",
    "RULE_FOREST",
    "ModelMetadata",
    "DEFAULT_SENSOR_RANGES",
    "Band",
    "SensorRange",
]
