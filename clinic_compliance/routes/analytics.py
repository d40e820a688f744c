"""Time-series and grouping routes for dashboard charts."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from clinic_compliance.analytics import (
    build_monthly_series,
    detect_anomalies,
    generate_insights,
    moving_average_forecast,
    top_n_by_sum,
)
from clinic_compliance.schemas import (
    AnomalyRequest,
    ForecastRequest,
    InsightsRequest,
    MonthlySeriesRequest,
    TopNRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.post("/monthly-series")
async def monthly_series(request: MonthlySeriesRequest):
    """Sum values per ``YYYY-MM`` month, oldest first."""
    series = build_monthly_series(
        request.points, date_field=request.date_field, value_field=request.value_field
    )
    return {"series": [point.to_dict() for point in series]}


@router.post("/forecast")
async def forecast(request: ForecastRequest):
    """Moving-average forecast for the next ``horizon`` periods."""
    try:
        points = moving_average_forecast(
            request.series, window_size=request.window_size, horizon=request.horizon
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"forecast": [point.to_dict() for point in points]}


@router.post("/anomalies")
async def anomalies(request: AnomalyRequest):
    """Indices and z-scores of values beyond the std-dev threshold."""
    flagged = detect_anomalies(request.values, request.threshold_std_devs)
    return {"anomalies": [a.to_dict() for a in flagged], "total": len(flagged)}


@router.post("/top-n")
async def top_n(request: TopNRequest):
    """Top groups by summed value."""
    try:
        groups = top_n_by_sum(
            request.rows, request.group_field, request.sum_field, n=request.n
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"groups": [g.to_dict() for g in groups]}


@router.post("/insights")
async def insights(request: InsightsRequest):
    """Prioritized narrative insights for a billing upload."""
    try:
        results = generate_insights(request.billing_rows, request.doctor_rows)
    except Exception as e:
        logger.error(f"Insight generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Insight generation failed")
    return {"insights": [i.to_dict() for i in results], "total": len(results)}
