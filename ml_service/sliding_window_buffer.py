from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, Optional

import numpy as np

from ml_service.models.detection import SensorReading
from ml_service.models.regression_model import compute_slope


@dataclass(frozen=True)
class WindowStats:
    """Estadísticos de un parámetro sobre la ventana de historial.

    ``variance`` es poblacional (sin Bessel) y ``slope`` es la pendiente de
    regresión lineal con x = 0..n-1 (valor por lectura).
    """

    parameter: str
    mean: float
    variance: float
    slope: float
    count: int
    last_value: float


class SlidingWindowBuffer:
    """Buffer deslizante en memoria con las últimas lecturas.

    - Mantiene como máximo ``max_points`` lecturas completas.
    - Permite calcular estadísticos por parámetro sobre la ventana.
    - ``batch_analyze`` lo reutiliza entre pasos en vez de recortar el
      historial completo en cada lectura.
    """

    def __init__(self, max_points: int = 10, readings: Iterable[SensorReading] = ()) -> None:
        self._max_points = int(max_points)
        self._buffer: Deque[SensorReading] = deque(maxlen=self._max_points)
        for reading in readings:
            self._buffer.append(reading)

    @classmethod
    def from_history(cls, history: Iterable[SensorReading], max_points: int = 10) -> "SlidingWindowBuffer":
        history = list(history)
        return cls(max_points=max_points, readings=history[-max_points:])

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def max_points(self) -> int:
        return self._max_points

    def add_reading(self, reading: SensorReading) -> None:
        self._buffer.append(reading)

    def values(self, parameter: str) -> list[float]:
        return [reading.value_of(parameter) for reading in self._buffer]

    def stats(self, parameter: str) -> Optional[WindowStats]:
        values = self.values(parameter)
        if not values:
            return None

        arr = np.asarray(values, dtype=float)
        return WindowStats(
            parameter=parameter,
            mean=float(arr.mean()),
            variance=float(arr.var()),
            slope=compute_slope(values),
            count=len(values),
            last_value=values[-1],
        )
