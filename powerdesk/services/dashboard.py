"""Server-side dashboard analytics for a property."""

from datetime import date

from sqlalchemy.orm import Session

from powerdesk.schemas.analytics import AggregationResult, ReadingSnapshot, rows_from_raw
from powerdesk.schemas.reading import ReadingResponse
from powerdesk.services import analytics
from powerdesk.services.property import get_property
from powerdesk.services.reading import list_readings
from powerdesk.services.tariff import get_active_tariff


def load_snapshot(db: Session, property_id: int, today: date) -> ReadingSnapshot:
    """Query the four reading windows and normalize them into rows."""
    windows = {}
    for name, (start, end) in analytics.reading_windows(today).items():
        readings = list_readings(db, property_id, start_date=start, end_date=end, today=today)
        windows[name] = rows_from_raw(
            [ReadingResponse.model_validate(r).model_dump(mode="json") for r in readings]
        )
    return ReadingSnapshot(**windows)


def get_property_analytics(
    db: Session,
    property_id: int,
    trend_days: int,
    meter_id: int | None = None,
    today: date | None = None,
) -> AggregationResult:
    """Aggregate a property's readings using today's active tariff."""
    today = today or date.today()
    get_property(db, property_id)

    tariff = get_active_tariff(db, property_id, today)
    snapshot = load_snapshot(db, property_id, today)
    return analytics.aggregate(
        snapshot,
        tariff.rate_per_unit if tariff else 0,
        trend_days=trend_days,
        today=today,
        meter_id=str(meter_id) if meter_id is not None else None,
    )
