"""Property Pydantic schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel


class PropertyBase(BaseModel):
    """Base property schema."""

    name: str


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""

    code: str | None = None
    address: str | None = None


class PropertyResponse(PropertyBase):
    """Schema for property response."""

    id: int
    code: str | None
    address: str | None
    created_at: datetime
    is_active: bool

    model_config = {"from_attributes": True}
