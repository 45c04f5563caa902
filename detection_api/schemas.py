from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ml_service.models.detection import DetectionResult, DetectionStatus, SensorReading
from ml_service.utils.numeric_precision import is_valid_sensor_value


class SensorReadingIn(BaseModel):
    """Lectura de entrada.

    Formato esperado (camelCase como el frontend; snake_case también vale):
    {
        "engineTemp": 85,
        "oilPressure": 2.5,
        "batteryVoltage": 12.6,
        "engineVibration": 12,
        "engineRPM": 2000,          # o "rpm"
        "timestamp": "2026-01-31T08:00:00Z"   # opcional
    }
    """

    model_config = ConfigDict(populate_by_name=True)

    engine_temp: float = Field(..., validation_alias=AliasChoices("engineTemp", "engine_temp"))
    oil_pressure: float = Field(..., validation_alias=AliasChoices("oilPressure", "oil_pressure"))
    battery_voltage: float = Field(
        ..., validation_alias=AliasChoices("batteryVoltage", "battery_voltage")
    )
    engine_vibration: float = Field(
        ..., validation_alias=AliasChoices("engineVibration", "engine_vibration")
    )
    engine_rpm: float = Field(..., validation_alias=AliasChoices("engineRPM", "rpm", "engine_rpm"))
    timestamp: Optional[datetime] = None

    @field_validator(
        "engine_temp", "oil_pressure", "battery_voltage", "engine_vibration", "engine_rpm",
        mode="before",
    )
    @classmethod
    def validate_number(cls, v):
        # Solo números reales: ni strings numéricos, ni bool, ni NaN/Infinity
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("must be a number")
        if not is_valid_sensor_value(v):
            raise ValueError("must be a finite number")
        return v

    def to_reading(self) -> SensorReading:
        kwargs = dict(
            engine_temp=self.engine_temp,
            oil_pressure=self.oil_pressure,
            battery_voltage=self.battery_voltage,
            engine_vibration=self.engine_vibration,
            engine_rpm=self.engine_rpm,
        )
        if self.timestamp is not None:
            kwargs["timestamp"] = self.timestamp
        return SensorReading(**kwargs)


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_data: SensorReadingIn = Field(..., alias="currentData")
    historical_data: List[SensorReadingIn] = Field(default_factory=list, alias="historicalData")


class BatchAnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_points: List[SensorReadingIn] = Field(..., alias="dataPoints", min_length=1)
    save_results: bool = Field(default=False, alias="saveResults")


class DetectionResultOut(BaseModel):
    id: Optional[int] = None
    parameter: str
    confidence: float
    status: DetectionStatus
    recommendation: str
    timestamp: datetime

    @classmethod
    def from_result(cls, result: DetectionResult) -> "DetectionResultOut":
        return cls(
            id=result.id,
            parameter=result.parameter,
            confidence=result.confidence,
            status=result.status,
            recommendation=result.recommendation,
            timestamp=result.timestamp,
        )


class ParameterCountsOut(BaseModel):
    critical: int
    warning: int
    normal: int


class FaultStatisticsOut(BaseModel):
    total_results: int
    total_faults: int
    critical_faults: int
    warning_faults: int
    normal_readings: int
    average_confidence: float
    faults_by_parameter: Dict[str, ParameterCountsOut] = Field(default_factory=dict)


class AnalyzeResponse(BaseModel):
    success: bool = True
    results: List[DetectionResultOut]
    timestamp: datetime


class DetectionListResponse(BaseModel):
    success: bool = True
    results: List[DetectionResultOut]
    count: int


class BatchAnalyzeResponse(BaseModel):
    success: bool = True
    batch_results: List[List[DetectionResultOut]]
    statistics: FaultStatisticsOut
    total_data_points: int
    total_detections: int
    timestamp: datetime


class ModelParametersIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    n_estimators: int = Field(..., alias="nEstimators", ge=1, le=1000)
    max_depth: int = Field(..., alias="maxDepth", ge=1, le=50)
    threshold: float = Field(..., ge=0.0, le=1.0)


class ModelConfigIn(BaseModel):
    type: Literal["RandomForest"]
    parameters: ModelParametersIn


class ModelUpdateRequest(BaseModel):
    model: ModelConfigIn


class ModelResponse(BaseModel):
    success: bool = True
    model: dict
    metadata: dict
    message: Optional[str] = None


class ParameterToggleIn(BaseModel):
    enabled: bool


class ParameterOut(BaseModel):
    name: str
    display_name: str
    description: str
    weight: float
    enabled: bool


class ValidateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_points: List[SensorReadingIn] = Field(..., alias="dataPoints", min_length=1)
