"""Meter multiplier service: time-versioned CT/PT ratios per meter."""

import logging
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import or_
from sqlalchemy.orm import Session

from powerdesk.models.meter import ElectricityMeter
from powerdesk.models.meter_multiplier import MeterMultiplier
from powerdesk.schemas.multiplier import MultiplierCreate
from powerdesk.services.meter import get_property_meter

logger = logging.getLogger(__name__)

DEFAULT_CT_PRIMARY = Decimal("200")
DEFAULT_CT_SECONDARY = Decimal("5")
DEFAULT_PT_PRIMARY = Decimal("11000")
DEFAULT_PT_SECONDARY = Decimal("110")


def compute_multiplier_value(
    ct_primary: Decimal,
    ct_secondary: Decimal,
    pt_primary: Decimal,
    pt_secondary: Decimal,
    meter_constant: Decimal | None = None,
) -> Decimal:
    """Multiplier = CT ratio x PT ratio x meter constant."""
    value = (ct_primary / ct_secondary) * (pt_primary / pt_secondary)
    if meter_constant is not None:
        value *= meter_constant
    return value.quantize(Decimal("0.0001"))


def get_active_multiplier(db: Session, meter_id: int, on_date: date) -> MeterMultiplier | None:
    """Get the multiplier in force for a meter on a date, if any."""
    return (
        db.query(MeterMultiplier)
        .filter(
            MeterMultiplier.meter_id == meter_id,
            MeterMultiplier.effective_from <= on_date,
            or_(MeterMultiplier.effective_to.is_(None), MeterMultiplier.effective_to >= on_date),
        )
        .order_by(MeterMultiplier.effective_from.desc())
        .first()
    )


def get_multiplier(db: Session, multiplier_id: int) -> MeterMultiplier | None:
    """Get a multiplier by ID."""
    return db.query(MeterMultiplier).filter(MeterMultiplier.id == multiplier_id).first()


def get_meter_multipliers(db: Session, meter_id: int) -> list[MeterMultiplier]:
    """Get all multiplier versions for a meter, newest first."""
    return (
        db.query(MeterMultiplier)
        .filter(MeterMultiplier.meter_id == meter_id)
        .order_by(MeterMultiplier.effective_from.desc())
        .all()
    )


def get_property_multipliers(db: Session, property_id: int) -> list[MeterMultiplier]:
    """Get multiplier versions for every meter of a property, newest first."""
    return (
        db.query(MeterMultiplier)
        .join(ElectricityMeter, MeterMultiplier.meter_id == ElectricityMeter.id)
        .filter(ElectricityMeter.property_id == property_id)
        .order_by(MeterMultiplier.effective_from.desc())
        .all()
    )


def save_multiplier(
    db: Session,
    property_id: int,
    data: MultiplierCreate,
) -> tuple[MeterMultiplier, bool]:
    """Create a multiplier version, or update the one with the same start date.

    Returns the multiplier and whether it was newly created.
    """
    get_property_meter(db, property_id, data.meter_id)

    existing = (
        db.query(MeterMultiplier)
        .filter(
            MeterMultiplier.meter_id == data.meter_id,
            MeterMultiplier.effective_from == data.effective_from,
        )
        .first()
    )
    if existing:
        for field in (
            "ct_ratio_primary",
            "ct_ratio_secondary",
            "pt_ratio_primary",
            "pt_ratio_secondary",
            "meter_constant",
            "reason",
        ):
            value = getattr(data, field)
            if value is not None:
                setattr(existing, field, value)
        existing.multiplier_value = data.multiplier_value or compute_multiplier_value(
            existing.ct_ratio_primary,
            existing.ct_ratio_secondary,
            existing.pt_ratio_primary,
            existing.pt_ratio_secondary,
            existing.meter_constant,
        )
        db.commit()
        db.refresh(existing)
        logger.info("Updated multiplier %s for meter %s", existing.id, data.meter_id)
        return existing, False

    day_before = data.effective_from - timedelta(days=1)
    open_versions = (
        db.query(MeterMultiplier)
        .filter(
            MeterMultiplier.meter_id == data.meter_id,
            MeterMultiplier.effective_to.is_(None),
            MeterMultiplier.effective_from < data.effective_from,
        )
        .all()
    )
    for version in open_versions:
        version.effective_to = day_before

    ct_primary = data.ct_ratio_primary or DEFAULT_CT_PRIMARY
    ct_secondary = data.ct_ratio_secondary or DEFAULT_CT_SECONDARY
    pt_primary = data.pt_ratio_primary or DEFAULT_PT_PRIMARY
    pt_secondary = data.pt_ratio_secondary or DEFAULT_PT_SECONDARY

    multiplier = MeterMultiplier(
        meter_id=data.meter_id,
        ct_ratio_primary=ct_primary,
        ct_ratio_secondary=ct_secondary,
        pt_ratio_primary=pt_primary,
        pt_ratio_secondary=pt_secondary,
        meter_constant=data.meter_constant,
        multiplier_value=data.multiplier_value
        or compute_multiplier_value(
            ct_primary, ct_secondary, pt_primary, pt_secondary, data.meter_constant
        ),
        effective_from=data.effective_from,
        effective_to=data.effective_to,
        reason=data.reason,
    )
    db.add(multiplier)
    db.commit()
    db.refresh(multiplier)
    logger.info(
        "Created multiplier %s (x%s) for meter %s",
        multiplier.id,
        multiplier.multiplier_value,
        data.meter_id,
    )
    return multiplier, True
