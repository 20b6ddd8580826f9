"""Grid tariff service: time-versioned rates per property."""

import logging
from datetime import date, timedelta

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from powerdesk.models.grid_tariff import GridTariff
from powerdesk.models.reading import ElectricityReading
from powerdesk.schemas.tariff import GridTariffCreate
from powerdesk.services.property import get_property

logger = logging.getLogger(__name__)


def get_active_tariff(db: Session, property_id: int, on_date: date) -> GridTariff | None:
    """Get the tariff in force for a property on a date, if any."""
    return (
        db.query(GridTariff)
        .filter(
            GridTariff.property_id == property_id,
            GridTariff.effective_from <= on_date,
            or_(GridTariff.effective_to.is_(None), GridTariff.effective_to >= on_date),
        )
        .order_by(GridTariff.effective_from.desc())
        .first()
    )


def get_tariff_history(db: Session, property_id: int) -> list[GridTariff]:
    """Get all tariff versions for a property, newest first."""
    return (
        db.query(GridTariff)
        .filter(GridTariff.property_id == property_id)
        .order_by(GridTariff.effective_from.desc())
        .all()
    )


def create_tariff(db: Session, property_id: int, data: GridTariffCreate) -> GridTariff:
    """Create a new tariff version.

    The currently open version (no end date, starting earlier) is closed on
    the day before the new one takes effect.
    """
    get_property(db, property_id)

    day_before = data.effective_from - timedelta(days=1)
    open_versions = (
        db.query(GridTariff)
        .filter(
            GridTariff.property_id == property_id,
            GridTariff.effective_to.is_(None),
            GridTariff.effective_from < data.effective_from,
        )
        .all()
    )
    for version in open_versions:
        version.effective_to = day_before

    tariff = GridTariff(
        property_id=property_id,
        utility_provider=data.utility_provider,
        rate_per_unit=data.rate_per_unit,
        unit_type="kVAh",
        effective_from=data.effective_from,
        effective_to=data.effective_to,
    )
    db.add(tariff)
    db.commit()
    db.refresh(tariff)
    logger.info(
        "Created tariff %s for property %s at %s/unit from %s",
        tariff.id,
        property_id,
        tariff.rate_per_unit,
        tariff.effective_from,
    )
    return tariff


def delete_tariff(db: Session, property_id: int, tariff_id: int) -> None:
    """Delete a tariff version, resetting the cost of readings priced with it."""
    tariff = (
        db.query(GridTariff)
        .filter(GridTariff.id == tariff_id, GridTariff.property_id == property_id)
        .first()
    )
    if not tariff:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tariff not found",
        )

    reset = (
        db.query(ElectricityReading)
        .filter(ElectricityReading.tariff_id == tariff_id)
        .update(
            {
                ElectricityReading.tariff_id: None,
                ElectricityReading.tariff_rate_used: None,
                ElectricityReading.computed_cost: 0,
            },
            synchronize_session=False,
        )
    )
    db.delete(tariff)
    db.commit()
    logger.info("Deleted tariff %s; reset cost on %s readings", tariff_id, reset)
