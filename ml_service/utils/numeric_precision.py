"""Funciones canónicas de precisión numérica.

Política de precisión:
- Cálculos internos: Python float (IEEE 754 double)
- Confianza: acotada a [CONFIDENCE_FLOOR, CONFIDENCE_CEIL]
- Redondeo: SOLO en frontera (resultado publicado), nunca en cálculos intermedios
"""

from __future__ import annotations

import math

CONFIDENCE_FLOOR = 0.01
CONFIDENCE_CEIL = 0.99

# Decimales con los que se publica la confianza
CONFIDENCE_PRECISION = 2


def is_valid_sensor_value(value) -> bool:
    """True si ``value`` es un número finito (los bool no cuentan)."""
    if value is None or isinstance(value, bool):
        return False
    try:
        f = float(value)
        return math.isfinite(f)
    except (TypeError, ValueError):
        return False


def clamp(value: float, lower: float, upper: float) -> float:
    return min(upper, max(lower, value))


def clamp_confidence(value: float) -> float:
    return clamp(value, CONFIDENCE_FLOOR, CONFIDENCE_CEIL)


def round_for_display(value: float, decimals: int = CONFIDENCE_PRECISION) -> float:
    """Redondea un valor a la precisión canónica.

    USAR SOLO en la frontera, nunca para cálculos intermedios.
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** decimals
    # Medio hacia arriba, como Math.round del frontend que consume el resultado
    return math.floor(value * factor + 0.5) / factor
