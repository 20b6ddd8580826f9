"""Electricity analytics API route."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from powerdesk.core.config import settings
from powerdesk.core.database import get_db
from powerdesk.schemas.analytics import AggregationResult
from powerdesk.services import analytics, dashboard

router = APIRouter(prefix="/properties/{property_id}", tags=["analytics"])


@router.get("/electricity-analytics", response_model=AggregationResult)
def get_electricity_analytics(
    property_id: int,
    trend_days: int = Query(settings.DEFAULT_TREND_DAYS, alias="trendDays"),
    meter_id: int | None = Query(None, alias="meterId"),
    db: Session = Depends(get_db),
) -> AggregationResult:
    """Cost and unit rollups for today, this month and last month.

    Includes per-logged-day averages, a fixed-length daily trend and a
    per-meter breakdown. Pass ``meterId`` to restrict to one meter.
    """
    try:
        days = analytics.parse_trend_days(trend_days)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return dashboard.get_property_analytics(db, property_id, days, meter_id=meter_id)
