"""Electricity meter API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from powerdesk.core.database import get_db
from powerdesk.schemas.meter import MeterCreate, MeterResponse, MeterUpdate
from powerdesk.services import meter as meter_service

router = APIRouter(prefix="/properties/{property_id}/electricity-meters", tags=["meters"])


@router.get("", response_model=list[MeterResponse])
def list_meters(
    property_id: int,
    db: Session = Depends(get_db),
) -> list[MeterResponse]:
    """List all meters for a property, ordered by name."""
    meters = meter_service.get_meters_for_property(db, property_id)
    return [MeterResponse.model_validate(m) for m in meters]


@router.post("", response_model=MeterResponse, status_code=status.HTTP_201_CREATED)
def create_meter(
    property_id: int,
    meter_data: MeterCreate,
    db: Session = Depends(get_db),
) -> MeterResponse:
    """Create a meter for a property."""
    meter = meter_service.create_meter(db, property_id, meter_data)
    return MeterResponse.model_validate(meter)


@router.patch("/{meter_id}", response_model=MeterResponse)
def update_meter(
    property_id: int,
    meter_id: int,
    meter_data: MeterUpdate,
    db: Session = Depends(get_db),
) -> MeterResponse:
    """Update a meter (name, number, load limit or status)."""
    meter = meter_service.update_meter(db, property_id, meter_id, meter_data)
    return MeterResponse.model_validate(meter)


@router.delete("/{meter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meter(
    property_id: int,
    meter_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Delete a meter and its readings."""
    meter_service.delete_meter(db, property_id, meter_id)
