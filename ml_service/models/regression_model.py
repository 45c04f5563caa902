from __future__ import annotations

from typing import Literal, Sequence

import numpy as np


Trend = Literal["up", "down", "stable"]


def compute_slope(values: Sequence[float]) -> float:
    """Pendiente de mínimos cuadrados de ``values`` contra el índice 0..n-1.

    slope = (n·Σxy - Σx·Σy) / (n·Σx² - (Σx)²). Con menos de 2 puntos es 0.
    """
    y = np.asarray(values, dtype=float)
    n = y.size
    if n < 2:
        return 0.0

    x = np.arange(n, dtype=float)
    sum_x = x.sum()
    denominator = n * float(np.dot(x, x)) - sum_x * sum_x
    if denominator == 0:
        return 0.0
    return float((n * float(np.dot(x, y)) - sum_x * y.sum()) / denominator)


def compute_trend(coef: float, eps: float = 1e-3) -> Trend:
    if coef > eps:
        return "up"
    if coef < -eps:
        return "down"
    return "stable"
