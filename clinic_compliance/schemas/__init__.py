"""Shared Pydantic schemas for the compliance service.

This module centralizes request models used across routers so the row-limit
check lives in one place.
"""

from .analytics import (
    AnomalyRequest,
    ForecastRequest,
    InsightsRequest,
    MonthlySeriesRequest,
    TopNRequest,
)
from .compliance import ComplianceRunRequest, check_row_limit

__all__ = [
    "AnomalyRequest",
    "ComplianceRunRequest",
    "ForecastRequest",
    "InsightsRequest",
    "MonthlySeriesRequest",
    "TopNRequest",
    "check_row_limit",
]
