"""CSV export of electricity readings."""

import csv
import io
import logging
from datetime import date
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from powerdesk.services.property import get_property
from powerdesk.services.reading import list_readings

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Date",
    "Meter Name",
    "Meter Number",
    "Meter Type",
    "Opening Reading (kWh)",
    "Closing Reading (kWh)",
    "Units Consumed (kWh)",
    "Multiplier",
    "Final Units",
    "Tariff Rate",
    "Cost",
    "Notes",
    "Alert Status",
    "Logged At",
]


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def export_filename(code: str | None, start_date: date | None, end_date: date | None) -> str:
    """Build the attachment filename for an export."""
    start = start_date.isoformat() if start_date else "all"
    end = end_date.isoformat() if end_date else "now"
    return f"electricity_{code or 'export'}_{start}_to_{end}.csv"


def export_readings_csv(
    db: Session,
    property_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
) -> tuple[str, str]:
    """Render readings in a date range as CSV.

    Returns (filename, csv_text). Commas in notes are replaced with
    semicolons so the file stays readable in naive parsers.
    """
    db_property = get_property(db, property_id)
    readings = list_readings(db, property_id, start_date=start_date, end_date=end_date)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for r in readings:
        writer.writerow(
            [
                r.reading_date.isoformat(),
                r.meter.name if r.meter else "",
                (r.meter.meter_number or "") if r.meter else "",
                _plain(r.meter.meter_type) if r.meter else "",
                r.opening_reading,
                r.closing_reading,
                r.computed_units,
                r.multiplier_value_used,
                r.final_units if r.final_units is not None else "",
                r.tariff_rate_used if r.tariff_rate_used is not None else "",
                r.computed_cost,
                (r.notes or "").replace(",", ";"),
                _plain(r.alert_status),
                r.created_at.isoformat(timespec="seconds"),
            ]
        )

    filename = export_filename(db_property.code, start_date, end_date)
    logger.info("Exporting %s readings to %s", len(readings), filename)
    return filename, buffer.getvalue()
