"""Electricity reading API routes."""

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from powerdesk.core.database import get_db
from powerdesk.schemas.reading import ReadingBatchCreate, ReadingCreate, ReadingResponse
from powerdesk.services import reading as reading_service

router = APIRouter(prefix="/properties/{property_id}/electricity-readings", tags=["readings"])


@router.get("", response_model=list[ReadingResponse])
def list_readings(
    property_id: int,
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    meter_id: int | None = Query(None, alias="meterId"),
    period: Literal["today", "week", "month"] | None = Query(None),
    db: Session = Depends(get_db),
) -> list[ReadingResponse]:
    """List readings newest first; ``period`` overrides the date range."""
    readings = reading_service.list_readings(
        db,
        property_id,
        start_date=start_date,
        end_date=end_date,
        meter_id=meter_id,
        period=period,
    )
    return [ReadingResponse.model_validate(r) for r in readings]


@router.post(
    "",
    response_model=ReadingResponse | list[ReadingResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_readings(
    property_id: int,
    data: ReadingBatchCreate | ReadingCreate,
    db: Session = Depends(get_db),
) -> ReadingResponse | list[ReadingResponse]:
    """Log a single reading, or a batch under ``readings``.

    Units, multiplier and cost are derived; they are never entered.
    """
    if isinstance(data, ReadingBatchCreate):
        readings = reading_service.create_readings(db, property_id, data.readings)
        return [ReadingResponse.model_validate(r) for r in readings]

    (reading,) = reading_service.create_readings(db, property_id, [data])
    return ReadingResponse.model_validate(reading)


@router.delete("")
def delete_reading(
    property_id: int,
    reading_id: int = Query(..., alias="id"),
    db: Session = Depends(get_db),
) -> dict[str, bool]:
    """Delete a reading and recalibrate its meter."""
    reading_service.delete_reading(db, property_id, reading_id)
    return {"success": True}
