"""Analytics schemas: normalized reading rows and aggregation output.

Rows arriving from the readings endpoint have optional, nullable numeric
fields that may be numbers or numeric strings. ``ReadingRow`` normalizes
them once, up front, so the aggregation code only ever sees ``Decimal``
or ``None``.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

NUMERIC_FIELDS = (
    "opening_reading",
    "closing_reading",
    "computed_units",
    "final_units",
    "computed_cost",
    "tariff_rate_used",
    "multiplier_value_used",
)


def to_decimal(value: Any) -> Decimal | None:
    """Coerce a loosely typed numeric value to Decimal, or None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int | float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return result if result.is_finite() else None


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


class ReadingRow(BaseModel):
    """One reading as consumed by the aggregation functions."""

    model_config = ConfigDict(frozen=True)

    reading_id: str | None = None
    meter_id: str | None = None
    reading_date: str = ""
    opening_reading: Decimal | None = None
    closing_reading: Decimal | None = None
    computed_units: Decimal | None = None
    final_units: Decimal | None = None
    computed_cost: Decimal | None = None
    tariff_rate_used: Decimal | None = None
    multiplier_value_used: Decimal | None = None
    meter_name: str | None = None
    meter_type: str | None = None
    alert_status: str | None = None

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> Decimal | None:
        """Missing or malformed numbers become None."""
        return to_decimal(v)

    @field_validator(
        "reading_id", "meter_id", "meter_name", "meter_type", "alert_status", mode="before"
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        """Identifiers may arrive as ints or strings."""
        return _to_text(v)

    @field_validator("reading_date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> str:
        """Keep only the ISO date part; bucketing compares date strings."""
        if v is None:
            return ""
        if isinstance(v, date):
            return v.isoformat()[:10]
        return str(v)[:10]

    @classmethod
    def from_raw(cls, raw: Any) -> "ReadingRow":
        """Build a row from a decoded JSON object.

        Meter details are read from the nested ``meter`` object when the
        readings endpoint embeds it. Anything that is not a mapping yields
        an empty row.
        """
        if not isinstance(raw, Mapping):
            return cls()
        data = {key: raw.get(key) for key in ("meter_id", "reading_date", "alert_status")}
        data["reading_id"] = raw.get("id")
        data.update({key: raw.get(key) for key in NUMERIC_FIELDS})
        meter = raw.get("meter")
        if isinstance(meter, Mapping):
            data["meter_name"] = meter.get("name")
            data["meter_type"] = meter.get("meter_type")
        return cls.model_validate(data)


def rows_from_raw(items: Any) -> list[ReadingRow]:
    """Normalize a decoded JSON payload into rows; non-lists become empty."""
    if not isinstance(items, list):
        return []
    return [ReadingRow.from_raw(item) for item in items]


class ReadingSnapshot(BaseModel):
    """The four reading windows a dashboard load works from."""

    model_config = ConfigDict(frozen=True)

    today: list[ReadingRow] = []
    month: list[ReadingRow] = []
    previous_month: list[ReadingRow] = []
    trend: list[ReadingRow] = []


class WindowTotals(BaseModel):
    """Cost and unit totals over one window."""

    cost: Decimal = Decimal("0")
    units: Decimal = Decimal("0")


class TrendPoint(BaseModel):
    """One day's bucket in a trend series."""

    date: date
    cost: Decimal
    units: Decimal


class MeterShare(BaseModel):
    """A meter's share of the month's consumption."""

    meter_id: str | None
    name: str
    meter_type: str | None
    units: Decimal
    percentage: int


class ReadingAlert(BaseModel):
    """A month reading flagged as warning or critical when it was logged."""

    reading_id: str | None
    meter_id: str | None
    meter_name: str
    units: Decimal
    reading_date: str
    severity: str


class AggregationResult(BaseModel):
    """Derived dashboard figures; recomputed on every load, never stored."""

    active_tariff_rate: Decimal
    meter_id: str | None
    today: WindowTotals
    month: WindowTotals
    previous_month: WindowTotals
    averages: WindowTotals
    month_change_pct: int
    today_change_pct: int
    trend_days: int
    trend: list[TrendPoint]
    breakdown: list[MeterShare]
    alerts: list[ReadingAlert]
