"""Meter multiplier API routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from powerdesk.core.database import get_db
from powerdesk.schemas.multiplier import MultiplierCreate, MultiplierResponse
from powerdesk.services import multiplier as multiplier_service
from powerdesk.services.meter import get_property_meter

router = APIRouter(prefix="/properties/{property_id}/meter-multipliers", tags=["multipliers"])


@router.get("", response_model=MultiplierResponse | list[MultiplierResponse] | None)
def get_multipliers(
    property_id: int,
    meter_id: int | None = Query(None, alias="meterId"),
    on_date: date | None = Query(None, alias="date"),
    include_history: bool = Query(False, alias="includeHistory"),
    db: Session = Depends(get_db),
) -> MultiplierResponse | list[MultiplierResponse] | None:
    """Get multipliers.

    With ``meterId`` and ``date``: the version active on that date.
    With ``meterId`` only: that meter's history. Otherwise: every version
    for every meter of the property.
    """
    if meter_id is not None:
        get_property_meter(db, property_id, meter_id)
        if on_date and not include_history:
            active = multiplier_service.get_active_multiplier(db, meter_id, on_date)
            return MultiplierResponse.model_validate(active) if active else None
        multipliers = multiplier_service.get_meter_multipliers(db, meter_id)
    else:
        multipliers = multiplier_service.get_property_multipliers(db, property_id)
    return [MultiplierResponse.model_validate(m) for m in multipliers]


@router.post("", response_model=MultiplierResponse, status_code=status.HTTP_201_CREATED)
def save_multiplier(
    property_id: int,
    data: MultiplierCreate,
    response: Response,
    db: Session = Depends(get_db),
) -> MultiplierResponse:
    """Create a multiplier version; re-posting the same start date updates it."""
    multiplier, created = multiplier_service.save_multiplier(db, property_id, data)
    if not created:
        response.status_code = status.HTTP_200_OK
    return MultiplierResponse.model_validate(multiplier)
