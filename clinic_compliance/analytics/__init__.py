"""Time-series and grouping helpers for dashboard charts.

Independent of the compliance rules; every function works on already
materialized rows and returns plain result objects.
"""

from .aggregations import UNKNOWN_KEY, average, group_by, top_n_by_sum, total
from .insights import generate_insights
from .models import (
    Anomaly,
    ForecastPoint,
    GroupTotal,
    Insight,
    InsightCategory,
    InsightPriority,
    MonthlyPoint,
)
from .timeseries import build_monthly_series, detect_anomalies, moving_average_forecast

__all__ = [
    "build_monthly_series",
    "moving_average_forecast",
    "detect_anomalies",
    "top_n_by_sum",
    "group_by",
    "average",
    "total",
    "generate_insights",
    "UNKNOWN_KEY",
    "Anomaly",
    "ForecastPoint",
    "GroupTotal",
    "Insight",
    "InsightCategory",
    "InsightPriority",
    "MonthlyPoint",
]
