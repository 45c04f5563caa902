from __future__ import annotations

import threading
from collections import deque
from dataclasses import replace
from typing import Deque, Iterable, Optional

from ml_service.models.detection import DetectionResult, DetectionStatus


class InMemoryDetectionRepository:
    """Almacén en memoria de resultados de detección.

    - Capacidad acotada: al llenarse se descartan los más antiguos.
    - Asigna ids incrementales al guardar.
    - Los endpoints síncronos de FastAPI corren en un thread pool, así que
      las operaciones van bajo un lock.
    """

    def __init__(self, capacity: int = 10_000) -> None:
        self._items: Deque[DetectionResult] = deque(maxlen=max(1, int(capacity)))
        self._lock = threading.Lock()
        self._next_id = 1

    def save_many(self, results: Iterable[DetectionResult]) -> list[DetectionResult]:
        saved: list[DetectionResult] = []
        with self._lock:
            for result in results:
                stored = replace(result, id=self._next_id)
                self._next_id += 1
                self._items.append(stored)
                saved.append(stored)
        return saved

    def list_recent(
        self,
        limit: int = 50,
        parameter: Optional[str] = None,
        status: Optional[DetectionStatus] = None,
    ) -> list[DetectionResult]:
        """Resultados más recientes primero."""
        with self._lock:
            snapshot = list(self._items)

        out: list[DetectionResult] = []
        for result in reversed(snapshot):
            if parameter is not None and result.parameter != parameter:
                continue
            if status is not None and result.status != status:
                continue
            out.append(result)
            if len(out) >= limit:
                break
        return out

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
