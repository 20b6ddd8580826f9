"""Property service for business logic."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from powerdesk.models.property import Property
from powerdesk.schemas.property import PropertyCreate

logger = logging.getLogger(__name__)


def create_property(db: Session, property_data: PropertyCreate) -> Property:
    """Create a new property."""
    db_property = Property(
        name=property_data.name,
        code=property_data.code,
        address=property_data.address,
    )
    db.add(db_property)
    db.commit()
    db.refresh(db_property)
    logger.info("Created property %s (%s)", db_property.id, db_property.name)
    return db_property


def get_property(db: Session, property_id: int) -> Property:
    """Get a property by ID."""
    db_property = db.query(Property).filter(Property.id == property_id).first()
    if not db_property:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )
    return db_property


def get_properties(db: Session, skip: int = 0, limit: int = 100) -> list[Property]:
    """Get all active properties."""
    return (
        db.query(Property)
        .filter(Property.is_active.is_(True))
        .order_by(Property.name)
        .offset(skip)
        .limit(limit)
        .all()
    )
