from __future__ import annotations

from ml_service.models.detection import (
    BATTERY_VOLTAGE,
    ENGINE_TEMP,
    ENGINE_VIBRATION,
    OIL_PRESSURE,
    DetectionStatus,
)

DANGER_MARKER = "BAHAYA"

FALLBACK_RECOMMENDATION = "Tidak dapat memberikan rekomendasi untuk parameter ini."

# Textos en indonesio, tal como los muestra el producto.
# {value} se formatea con un decimal.
_RECOMMENDATIONS: dict[str, dict[DetectionStatus, str]] = {
    ENGINE_TEMP: {
        DetectionStatus.NORMAL: "Suhu mesin dalam batas normal. Lanjutkan monitoring rutin.",
        DetectionStatus.WARNING: (
            "Suhu mesin {value}°C sedikit tinggi. Periksa sistem pendingin, "
            "level coolant, dan kondisi radiator."
        ),
        DetectionStatus.CRITICAL: (
            DANGER_MARKER + ": Suhu mesin {value}°C sangat tinggi! Matikan mesin segera "
            "dan periksa sistem pendingin, thermostat, dan water pump."
        ),
    },
    OIL_PRESSURE: {
        DetectionStatus.NORMAL: "Tekanan oli dalam batas normal. Sistem pelumasan berfungsi baik.",
        DetectionStatus.WARNING: (
            "Tekanan oli {value} bar rendah. Periksa level oli, kondisi filter oli, "
            "dan kemungkinan kebocoran."
        ),
        DetectionStatus.CRITICAL: (
            DANGER_MARKER + ": Tekanan oli {value} bar sangat rendah! Matikan mesin segera "
            "untuk mencegah kerusakan bearing dan komponen internal."
        ),
    },
    BATTERY_VOLTAGE: {
        DetectionStatus.NORMAL: "Tegangan baterai normal. Sistem kelistrikan berfungsi baik.",
        DetectionStatus.WARNING: (
            "Tegangan baterai {value}V di luar rentang pengisian. Periksa alternator, "
            "regulator tegangan, kondisi baterai, dan koneksi kabel."
        ),
        DetectionStatus.CRITICAL: (
            DANGER_MARKER + ": Tegangan baterai {value}V sangat rendah! Sistem kelistrikan "
            "bermasalah, periksa alternator dan baterai segera."
        ),
    },
    ENGINE_VIBRATION: {
        DetectionStatus.NORMAL: "Getaran mesin dalam batas normal. Tidak ada masalah yang terdeteksi.",
        DetectionStatus.WARNING: (
            "Getaran mesin {value}Hz tinggi. Periksa engine mounting, balancing, "
            "dan kondisi komponen rotating."
        ),
        DetectionStatus.CRITICAL: (
            DANGER_MARKER + ": Getaran mesin {value}Hz sangat tinggi! Periksa komponen mesin, "
            "crankshaft, dan sistem mounting segera."
        ),
    },
}


def build_recommendation(parameter: str, status: DetectionStatus | str, value: float) -> str:
    """Texto de remediación para (parámetro, estado).

    Combinaciones desconocidas devuelven ``FALLBACK_RECOMMENDATION``.
    """
    try:
        status = DetectionStatus(status)
    except ValueError:
        return FALLBACK_RECOMMENDATION

    template = _RECOMMENDATIONS.get(parameter, {}).get(status)
    if template is None:
        return FALLBACK_RECOMMENDATION
    return template.format(value=f"{value:.1f}")
