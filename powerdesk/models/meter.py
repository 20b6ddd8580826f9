"""Electricity meter database model."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from powerdesk.core.database import Base
from powerdesk.models.enums import MeterStatus, MeterType

if TYPE_CHECKING:
    from powerdesk.models.meter_multiplier import MeterMultiplier
    from powerdesk.models.property import Property
    from powerdesk.models.reading import ElectricityReading


class ElectricityMeter(Base):
    """Electricity measurement point - grid main, generator, solar or submeter."""

    __tablename__ = "electricity_meters"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    meter_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    meter_type: Mapped[MeterType] = mapped_column(String(20), default=MeterType.MAIN, index=True)
    max_load_kw: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    status: Mapped[MeterStatus] = mapped_column(String(20), default=MeterStatus.ACTIVE)
    last_reading: Mapped[Decimal] = mapped_column(Numeric(14, 3), default=Decimal("0"))

    # Foreign keys
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)

    # Metadata
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    parent_property: Mapped["Property"] = relationship(back_populates="meters")
    readings: Mapped[list["ElectricityReading"]] = relationship(
        back_populates="meter",
        cascade="all, delete-orphan",
    )
    multipliers: Mapped[list["MeterMultiplier"]] = relationship(
        back_populates="meter",
        cascade="all, delete-orphan",
    )
