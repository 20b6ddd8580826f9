"""Electricity reading Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from powerdesk.models.enums import AlertStatus, MeterType


class ReadingCreate(BaseModel):
    """Schema for logging one daily reading.

    Units, multiplier and cost are computed server-side.
    """

    meter_id: int
    reading_date: date | None = None
    opening_reading: Decimal
    closing_reading: Decimal
    multiplier_id: int | None = None
    notes: str | None = Field(default=None, max_length=500)
    alert_status: AlertStatus = AlertStatus.NORMAL

    @model_validator(mode="after")
    def check_closing_not_below_opening(self) -> "ReadingCreate":
        """Closing reading must be at least the opening reading."""
        if self.closing_reading < self.opening_reading:
            raise ValueError("closing_reading must be >= opening_reading")
        return self


class ReadingBatchCreate(BaseModel):
    """Schema for logging readings for several meters at once."""

    readings: list[ReadingCreate] = Field(min_length=1)


class ReadingMeterInfo(BaseModel):
    """Meter details embedded in a reading response."""

    name: str
    meter_number: str | None
    meter_type: MeterType

    model_config = {"from_attributes": True}


class ReadingMultiplierInfo(BaseModel):
    """Multiplier version embedded in a reading response."""

    id: int
    multiplier_value: Decimal
    ct_ratio_primary: Decimal
    ct_ratio_secondary: Decimal
    pt_ratio_primary: Decimal
    pt_ratio_secondary: Decimal

    model_config = {"from_attributes": True}


class ReadingTariffInfo(BaseModel):
    """Tariff version embedded in a reading response."""

    id: int
    rate_per_unit: Decimal
    utility_provider: str | None

    model_config = {"from_attributes": True}


class ReadingResponse(BaseModel):
    """Schema for reading response."""

    id: int
    property_id: int
    meter_id: int
    reading_date: date
    opening_reading: Decimal
    closing_reading: Decimal
    computed_units: Decimal
    final_units: Decimal | None
    computed_cost: Decimal
    multiplier_id: int | None
    multiplier_value_used: Decimal
    tariff_id: int | None
    tariff_rate_used: Decimal | None
    notes: str | None
    alert_status: AlertStatus
    created_at: datetime
    meter: ReadingMeterInfo | None = None
    multiplier: ReadingMultiplierInfo | None = None
    tariff: ReadingTariffInfo | None = None

    model_config = {"from_attributes": True}
