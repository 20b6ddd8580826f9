"""Electricity export API route."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from powerdesk.core.database import get_db
from powerdesk.services import export as export_service

router = APIRouter(prefix="/properties/{property_id}", tags=["export"])


@router.get("/electricity-export")
def export_readings(
    property_id: int,
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
) -> Response:
    """Download readings in a date range as CSV."""
    filename, content = export_service.export_readings_csv(db, property_id, start_date, end_date)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
