"""Electricity reading service: log raw readings, derive units and cost."""

import logging
from datetime import date, timedelta
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from powerdesk.models.reading import ElectricityReading
from powerdesk.schemas.reading import ReadingCreate
from powerdesk.services.meter import get_property_meter
from powerdesk.services.multiplier import get_active_multiplier, get_multiplier
from powerdesk.services.property import get_property
from powerdesk.services.tariff import get_active_tariff

logger = logging.getLogger(__name__)

PERIOD_DAYS = {"week": 7, "month": 30}


def _build_reading(db: Session, property_id: int, data: ReadingCreate) -> ElectricityReading:
    """Price one reading: units x multiplier x active tariff rate."""
    meter = get_property_meter(db, property_id, data.meter_id)
    reading_date = data.reading_date or date.today()

    if data.multiplier_id is not None:
        multiplier = get_multiplier(db, data.multiplier_id)
        if not multiplier or multiplier.meter_id != meter.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Multiplier does not belong to this meter",
            )
    else:
        multiplier = get_active_multiplier(db, meter.id, reading_date)
    multiplier_value = (multiplier.multiplier_value if multiplier else None) or Decimal("1")

    tariff = get_active_tariff(db, property_id, reading_date)
    tariff_rate = tariff.rate_per_unit if tariff else Decimal("0")

    computed_units = data.closing_reading - data.opening_reading
    final_units = computed_units * multiplier_value
    computed_cost = (final_units * tariff_rate).quantize(Decimal("0.01"))

    meter.last_reading = data.closing_reading

    return ElectricityReading(
        property_id=property_id,
        meter_id=meter.id,
        reading_date=reading_date,
        opening_reading=data.opening_reading,
        closing_reading=data.closing_reading,
        computed_units=computed_units,
        final_units=final_units,
        computed_cost=computed_cost,
        multiplier_id=multiplier.id if multiplier else None,
        multiplier_value_used=multiplier_value,
        tariff_id=tariff.id if tariff else None,
        tariff_rate_used=tariff_rate,
        notes=data.notes,
        alert_status=data.alert_status,
    )


def create_readings(
    db: Session,
    property_id: int,
    items: list[ReadingCreate],
) -> list[ElectricityReading]:
    """Log one or more readings in a single transaction.

    Each meter's ``last_reading`` is advanced to the submitted closing value.
    """
    get_property(db, property_id)

    readings = [_build_reading(db, property_id, item) for item in items]
    db.add_all(readings)
    db.commit()
    for reading in readings:
        db.refresh(reading)

    logger.info("Saved %s readings for property %s", len(readings), property_id)
    return readings


def list_readings(
    db: Session,
    property_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
    meter_id: int | None = None,
    period: str | None = None,
    today: date | None = None,
) -> list[ElectricityReading]:
    """List readings, newest first.

    ``period`` (today, week or month) takes precedence over explicit dates.
    """
    today = today or date.today()
    query = (
        db.query(ElectricityReading)
        .options(
            joinedload(ElectricityReading.meter),
            joinedload(ElectricityReading.multiplier),
            joinedload(ElectricityReading.tariff),
        )
        .filter(ElectricityReading.property_id == property_id)
    )

    if period == "today":
        query = query.filter(ElectricityReading.reading_date == today)
    elif period in PERIOD_DAYS:
        since = today - timedelta(days=PERIOD_DAYS[period])
        query = query.filter(ElectricityReading.reading_date >= since)
    else:
        if start_date:
            query = query.filter(ElectricityReading.reading_date >= start_date)
        if end_date:
            query = query.filter(ElectricityReading.reading_date <= end_date)

    if meter_id is not None:
        query = query.filter(ElectricityReading.meter_id == meter_id)

    return query.order_by(
        ElectricityReading.reading_date.desc(),
        ElectricityReading.created_at.desc(),
    ).all()


def delete_reading(db: Session, property_id: int, reading_id: int) -> None:
    """Delete a reading and recalibrate its meter's last reading.

    The meter falls back to the closing value of its newest remaining
    reading, or 0 if none are left.
    """
    reading = (
        db.query(ElectricityReading)
        .filter(
            ElectricityReading.id == reading_id,
            ElectricityReading.property_id == property_id,
        )
        .first()
    )
    if not reading:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reading not found",
        )

    meter = reading.meter
    db.delete(reading)
    db.flush()

    latest = (
        db.query(ElectricityReading)
        .filter(ElectricityReading.meter_id == meter.id)
        .order_by(
            ElectricityReading.reading_date.desc(),
            ElectricityReading.created_at.desc(),
        )
        .first()
    )
    meter.last_reading = latest.closing_reading if latest else Decimal("0")
    db.commit()
    logger.info(
        "Deleted reading %s; meter %s last_reading now %s",
        reading_id,
        meter.id,
        meter.last_reading,
    )
