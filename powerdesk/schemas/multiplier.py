"""Meter multiplier Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class MultiplierCreate(BaseModel):
    """Schema for creating (or re-dating) a multiplier version.

    CT/PT ratios fall back to the common 200/5 and 11000/110 values when
    omitted. ``multiplier_value`` is derived from the ratios if not given.
    """

    meter_id: int
    effective_from: date
    effective_to: date | None = None
    ct_ratio_primary: Decimal | None = Field(default=None, gt=0)
    ct_ratio_secondary: Decimal | None = Field(default=None, gt=0)
    pt_ratio_primary: Decimal | None = Field(default=None, gt=0)
    pt_ratio_secondary: Decimal | None = Field(default=None, gt=0)
    meter_constant: Decimal | None = Field(default=None, gt=0)
    multiplier_value: Decimal | None = Field(default=None, gt=0)
    reason: str | None = None


class MultiplierResponse(BaseModel):
    """Schema for multiplier response."""

    id: int
    meter_id: int
    ct_ratio_primary: Decimal
    ct_ratio_secondary: Decimal
    pt_ratio_primary: Decimal
    pt_ratio_secondary: Decimal
    meter_constant: Decimal | None
    multiplier_value: Decimal
    effective_from: date
    effective_to: date | None
    reason: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
