"""Electricity meter Pydantic schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from powerdesk.models.enums import MeterStatus, MeterType


class MeterCreate(BaseModel):
    """Schema for creating an electricity meter."""

    name: str = Field(min_length=1, max_length=100)
    meter_number: str | None = None
    meter_type: MeterType = MeterType.MAIN
    max_load_kw: Decimal | None = None
    status: MeterStatus = MeterStatus.ACTIVE
    last_reading: Decimal = Decimal("0")


class MeterUpdate(BaseModel):
    """Schema for updating a meter - typically a status toggle."""

    name: str | None = None
    meter_number: str | None = None
    max_load_kw: Decimal | None = None
    status: MeterStatus | None = None

    @model_validator(mode="after")
    def check_at_least_one_field(self) -> "MeterUpdate":
        """Ensure at least one field is provided for update."""
        if all(v is None for v in [self.name, self.meter_number, self.max_load_kw, self.status]):
            raise ValueError("At least one field must be provided for update")
        return self


class MeterResponse(BaseModel):
    """Schema for meter response."""

    id: int
    property_id: int
    name: str
    meter_number: str | None
    meter_type: MeterType
    max_load_kw: Decimal | None
    status: MeterStatus
    last_reading: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
