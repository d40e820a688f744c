"""Date parsing utilities for uploaded billing and roster data."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

# Reasonable date bounds for visit dates; license expiry skips the upper one
MIN_VALID_YEAR = 1900
MAX_VALID_YEAR = 2100

DATE_FORMATS = [
    "%Y-%m-%d",  # ISO 8601
    "%m/%d/%Y",  # US format
    "%Y/%m/%d",
    "%Y%m%d",  # Compact
    "%d-%b-%Y",  # 15-Jan-2024
]


def parse_flexible_date(value: Any, max_year: int | None = MAX_VALID_YEAR) -> datetime | None:
    """Parse a date from the formats commonly found in CSV uploads.

    Supports the following inputs:
    - ``date`` / ``datetime`` objects (returned as naive datetimes)
    - ISO 8601: YYYY-MM-DD (e.g., 2024-01-15)
    - ISO 8601 with time: 2024-01-15T10:30:00, optionally with an offset
    - US format: MM/DD/YYYY (e.g., 01/15/2024)
    - Slashed ISO: YYYY/MM/DD
    - Compact: YYYYMMDD (e.g., 20240115)
    - Day-month-name: DD-Mon-YYYY (e.g., 15-Jan-2024)

    Timezone-aware values are converted to UTC and returned naive so they
    compare cleanly against naive evaluation timestamps.

    Validates that:
    - The date is a real calendar date (no Feb 30, etc.)
    - The year is at least 1900 and, unless ``max_year`` is None, at most
      ``max_year``

    Args:
        value: Raw cell value, or None
        max_year: Latest accepted year; None disables the upper bound (used
            for license expiry, where 9999-12-31 means "never expires")

    Returns:
        Parsed datetime object, or None if parsing fails or input is empty

    Examples:
        >>> parse_flexible_date("2024-01-15")
        datetime.datetime(2024, 1, 15, 0, 0)
        >>> parse_flexible_date("01/15/2024")
        datetime.datetime(2024, 1, 15, 0, 0)
        >>> parse_flexible_date("2024-02-30") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _within_bounds(_naive_utc_or_none(value), max_year)
    if isinstance(value, date):
        return _within_bounds(datetime(value.year, value.month, value.day), max_year)

    text = str(value).strip()
    if not text:
        return None

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            # strptime raises ValueError for invalid dates like Feb 30
            continue
        return _within_bounds(parsed, max_year)

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _within_bounds(_naive_utc_or_none(parsed), max_year)


def to_naive_utc(value: datetime) -> datetime:
    """Drop timezone info after converting aware datetimes to UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_month(value: datetime | date) -> str:
    """Format a date as its ``YYYY-MM`` bucket label."""
    return f"{value.year:04d}-{value.month:02d}"


def _naive_utc_or_none(value: datetime) -> datetime | None:
    try:
        return to_naive_utc(value)
    except OverflowError:
        # 9999-12-31T23:00-05:00 has no UTC equivalent
        return None


def _within_bounds(parsed: datetime | None, max_year: int | None) -> datetime | None:
    if parsed is None or parsed.year < MIN_VALID_YEAR:
        return None
    if max_year is not None and parsed.year > max_year:
        return None
    return parsed
