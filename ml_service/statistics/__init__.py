from .fault_statistics import FaultStatistics, ParameterCounts, compute_fault_statistics
from .time_statistics import (
    DailyStatistics,
    ParameterTrend,
    average_faults_per_day,
    compute_daily_statistics,
    compute_parameter_trends,
    compute_trend_direction,
)

__all__ = [
    "FaultStatistics",
    "ParameterCounts",
    "compute_fault_statistics",
    "DailyStatistics",
    "ParameterTrend",
    "average_faults_per_day",
    "compute_daily_statistics",
    "compute_parameter_trends",
    "compute_trend_direction",
]
