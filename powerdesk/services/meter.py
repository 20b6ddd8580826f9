"""Electricity meter service."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from powerdesk.models.meter import ElectricityMeter
from powerdesk.schemas.meter import MeterCreate, MeterUpdate
from powerdesk.services.property import get_property

logger = logging.getLogger(__name__)


def create_meter(db: Session, property_id: int, meter_data: MeterCreate) -> ElectricityMeter:
    """Create a meter for a property."""
    get_property(db, property_id)

    db_meter = ElectricityMeter(
        property_id=property_id,
        name=meter_data.name,
        meter_number=meter_data.meter_number,
        meter_type=meter_data.meter_type,
        max_load_kw=meter_data.max_load_kw,
        status=meter_data.status,
        last_reading=meter_data.last_reading,
    )
    db.add(db_meter)
    db.commit()
    db.refresh(db_meter)
    logger.info("Created meter %s for property %s", db_meter.id, property_id)
    return db_meter


def get_meters_for_property(db: Session, property_id: int) -> list[ElectricityMeter]:
    """Get all meters for a property, ordered by name."""
    return (
        db.query(ElectricityMeter)
        .filter(ElectricityMeter.property_id == property_id)
        .order_by(ElectricityMeter.name)
        .all()
    )


def get_property_meter(db: Session, property_id: int, meter_id: int) -> ElectricityMeter:
    """Get a meter, making sure it belongs to the property."""
    meter = (
        db.query(ElectricityMeter)
        .filter(
            ElectricityMeter.id == meter_id,
            ElectricityMeter.property_id == property_id,
        )
        .first()
    )
    if not meter:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meter not found in this property",
        )
    return meter


def update_meter(
    db: Session,
    property_id: int,
    meter_id: int,
    meter_data: MeterUpdate,
) -> ElectricityMeter:
    """Update a meter, e.g. toggle its status."""
    meter = get_property_meter(db, property_id, meter_id)

    update_data = meter_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(meter, field, value)

    db.commit()
    db.refresh(meter)
    return meter


def delete_meter(db: Session, property_id: int, meter_id: int) -> None:
    """Delete a meter together with its readings and multipliers."""
    meter = get_property_meter(db, property_id, meter_id)
    db.delete(meter)
    db.commit()
    logger.info("Deleted meter %s from property %s", meter_id, property_id)
