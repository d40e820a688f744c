"""Monthly series, moving-average forecasting and z-score anomaly detection."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np

from clinic_compliance.mapping import resolve
from clinic_compliance.utils import format_month, parse_amount, parse_flexible_date

from .models import Anomaly, ForecastPoint, MonthlyPoint

logger = logging.getLogger(__name__)

_MONTH_LABEL = re.compile(r"^(\d{4})-(\d{2})$")


def build_monthly_series(
    points: Iterable[Any],
    date_field: str = "date",
    value_field: str = "value",
) -> list[MonthlyPoint]:
    """Sum values per calendar month.

    Rows whose date or value can't be read are dropped. Months are returned
    in ascending order; months with no data are absent, not zero.

    Example:
        >>> build_monthly_series([
        ...     {"date": "2024-01-05", "value": 100},
        ...     {"date": "2024-01-20", "value": 50},
        ... ])
        [MonthlyPoint(month='2024-01', value=150.0)]
    """
    buckets: dict[str, list[float]] = {}
    dropped = 0
    for point in points:
        parsed = parse_flexible_date(resolve(point, [date_field]))
        value = parse_amount(resolve(point, [value_field]))
        if parsed is None or value is None:
            dropped += 1
            continue
        buckets.setdefault(format_month(parsed), []).append(value)

    if dropped:
        logger.debug(f"Dropped {dropped} point(s) with unreadable date or value")

    return [
        MonthlyPoint(month=month, value=float(np.sum(buckets[month])))
        for month in sorted(buckets)
    ]


def moving_average_forecast(
    series: Sequence[Any],
    window_size: int = 3,
    horizon: int = 3,
) -> list[ForecastPoint]:
    """Forecast ``horizon`` periods ahead with a trailing moving average.

    Each prediction is the mean of the last ``window_size`` values in a
    working buffer (or all of them while fewer exist) and is appended to that
    buffer, so later steps average over earlier predictions.

    Points may be MonthlyPoint/ForecastPoint objects or mappings with a
    ``date`` or ``month`` label and a ``value``. Points whose value is not a
    finite number are dropped, and labels continue from the last kept point.

    Raises:
        ValueError: If ``window_size < 1`` or ``horizon < 0``
    """
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")
    if horizon < 0:
        raise ValueError(f"horizon must be non-negative, got {horizon}")
    readable = [(label, v) for label, v in map(_label_and_value, series) if v is not None]
    if len(readable) < len(series):
        logger.debug(f"Dropped {len(series) - len(readable)} forecast point(s) with unreadable value")
    if not readable:
        return []

    buffer = [v for _, v in readable]
    next_label = _label_sequence(readable[-1][0])

    forecasts: list[ForecastPoint] = []
    for step in range(1, horizon + 1):
        window = buffer[-window_size:]
        prediction = float(np.mean(window))
        forecasts.append(ForecastPoint(date=next_label(step), value=prediction))
        buffer.append(prediction)
    return forecasts


def detect_anomalies(
    values: Sequence[Any], threshold_std_devs: float = 2.0
) -> list[Anomaly]:
    """Flag values more than ``threshold_std_devs`` population std devs from the mean.

    Non-numeric entries are ignored for the statistics and never flagged, but
    indices refer to positions in the original ``values``.
    """
    indexed = [(i, parse_amount(v)) for i, v in enumerate(values)]
    finite = [(i, v) for i, v in indexed if v is not None]
    if len(finite) < 2:
        return []

    data = np.array([v for _, v in finite], dtype=float)
    mean = data.mean()
    std = data.std()
    if std == 0:
        return []

    z_scores = (data - mean) / std
    return [
        Anomaly(index=index, value=value, z_score=float(z))
        for (index, value), z in zip(finite, z_scores)
        if abs(z) > threshold_std_devs
    ]


def _label_and_value(point: Any) -> tuple[str, float | None]:
    if isinstance(point, Mapping):
        label = point.get("date", point.get("month", ""))
        value = point.get("value")
    else:
        label = getattr(point, "date", getattr(point, "month", ""))
        value = getattr(point, "value", None)
    return str(label), parse_amount(value)


def _label_sequence(last: str):
    """Label for the k-th period after ``last``."""
    match = _MONTH_LABEL.match(last)
    if match is None or not 1 <= int(match.group(2)) <= 12:
        return lambda k: f"{last}+{k}"

    year, month = int(match.group(1)), int(match.group(2))

    def month_label(k: int) -> str:
        offset = year * 12 + (month - 1) + k
        return f"{offset // 12:04d}-{offset % 12 + 1:02d}"

    return month_label
