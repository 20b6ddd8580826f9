"""Grid tariff Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


class GridTariffCreate(BaseModel):
    """Schema for creating a new tariff version.

    Only kVAh tariffs are supported, so ``unit_type`` is not accepted.
    """

    rate_per_unit: Decimal = Field(gt=0)
    effective_from: date
    effective_to: date | None = None
    utility_provider: str | None = None

    @model_validator(mode="after")
    def check_date_range(self) -> "GridTariffCreate":
        """Reject ranges that end before they start."""
        if self.effective_to is not None and self.effective_to < self.effective_from:
            raise ValueError("effective_to must not be before effective_from")
        return self


class GridTariffResponse(BaseModel):
    """Schema for tariff response."""

    id: int
    property_id: int
    utility_provider: str | None
    rate_per_unit: Decimal
    unit_type: str
    effective_from: date
    effective_to: date | None
    created_at: datetime

    model_config = {"from_attributes": True}
