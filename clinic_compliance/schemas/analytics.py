"""Pydantic schemas for analytics endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .compliance import check_row_limit


class MonthlySeriesRequest(BaseModel):
    points: list[dict[str, Any]]
    date_field: str = "date"
    value_field: str = "value"

    @field_validator("points")
    @classmethod
    def validate_point_count(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return check_row_limit(v)


class ForecastRequest(BaseModel):
    """Historical points as ``{"date": ..., "value": ...}`` objects."""

    series: list[dict[str, Any]]
    window_size: int = 3
    horizon: int = 3

    @field_validator("series")
    @classmethod
    def validate_series_length(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return check_row_limit(v)


class AnomalyRequest(BaseModel):
    values: list[Any]
    threshold_std_devs: float = 2.0

    @field_validator("values")
    @classmethod
    def validate_value_count(cls, v: list[Any]) -> list[Any]:
        return check_row_limit(v)


class TopNRequest(BaseModel):
    rows: list[dict[str, Any]]
    group_field: str
    sum_field: str
    n: int = 5

    @field_validator("rows")
    @classmethod
    def validate_row_count(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return check_row_limit(v)


class InsightsRequest(BaseModel):
    """Billing upload plus an optional roster for name lookup and utilization."""

    billing_rows: list[dict[str, Any]] = Field(default_factory=list)
    doctor_rows: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("billing_rows", "doctor_rows")
    @classmethod
    def validate_row_count(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return check_row_limit(v)
