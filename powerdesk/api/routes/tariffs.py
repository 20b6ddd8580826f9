"""Grid tariff API routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from powerdesk.core.database import get_db
from powerdesk.schemas.tariff import GridTariffCreate, GridTariffResponse
from powerdesk.services import tariff as tariff_service

router = APIRouter(prefix="/properties/{property_id}/grid-tariffs", tags=["tariffs"])


@router.get("", response_model=GridTariffResponse | list[GridTariffResponse] | None)
def get_tariffs(
    property_id: int,
    on_date: date | None = Query(None, alias="date", description="Tariff active on this date"),
    include_history: bool = Query(False, alias="includeHistory"),
    db: Session = Depends(get_db),
) -> GridTariffResponse | list[GridTariffResponse] | None:
    """Get the active tariff for a date, or the full history newest first."""
    if on_date and not include_history:
        tariff = tariff_service.get_active_tariff(db, property_id, on_date)
        return GridTariffResponse.model_validate(tariff) if tariff else None

    tariffs = tariff_service.get_tariff_history(db, property_id)
    return [GridTariffResponse.model_validate(t) for t in tariffs]


@router.post("", response_model=GridTariffResponse, status_code=status.HTTP_201_CREATED)
def create_tariff(
    property_id: int,
    data: GridTariffCreate,
    db: Session = Depends(get_db),
) -> GridTariffResponse:
    """Create a new tariff version, closing the currently open one."""
    tariff = tariff_service.create_tariff(db, property_id, data)
    return GridTariffResponse.model_validate(tariff)


@router.delete("")
def delete_tariff(
    property_id: int,
    tariff_id: int = Query(..., alias="id"),
    db: Session = Depends(get_db),
) -> dict[str, bool]:
    """Delete a tariff version and reset the cost of readings priced with it."""
    tariff_service.delete_tariff(db, property_id, tariff_id)
    return {"success": True}
