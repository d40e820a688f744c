"""Pydantic schemas for compliance endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from clinic_compliance import config


def check_row_limit(rows: list[Any]) -> list[Any]:
    """Reject uploads larger than ``MAX_UPLOAD_ROWS``."""
    if len(rows) > config.MAX_UPLOAD_ROWS:
        raise ValueError(
            f"Too many rows. Maximum {config.MAX_UPLOAD_ROWS} per upload."
        )
    return rows


class ComplianceRunRequest(BaseModel):
    """Billing and roster uploads, already parsed into rows."""

    billing_rows: list[dict[str, Any]] = Field(default_factory=list)
    doctor_rows: list[dict[str, Any]] = Field(default_factory=list)
    now: datetime | None = None

    @field_validator("billing_rows", "doctor_rows")
    @classmethod
    def validate_row_count(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return check_row_limit(v)
