"""Electricity reading database model - the daily log."""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from powerdesk.core.database import Base
from powerdesk.models.enums import AlertStatus

if TYPE_CHECKING:
    from powerdesk.models.grid_tariff import GridTariff
    from powerdesk.models.meter import ElectricityMeter
    from powerdesk.models.meter_multiplier import MeterMultiplier


class ElectricityReading(Base):
    """Opening/closing reading pair for one meter on one date.

    Units and cost are derived when the reading is logged and never
    entered directly.
    """

    __tablename__ = "electricity_readings"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)
    meter_id: Mapped[int] = mapped_column(ForeignKey("electricity_meters.id"), index=True)
    reading_date: Mapped[date] = mapped_column(index=True)

    opening_reading: Mapped[Decimal] = mapped_column(Numeric(14, 3))
    closing_reading: Mapped[Decimal] = mapped_column(Numeric(14, 3))
    computed_units: Mapped[Decimal] = mapped_column(Numeric(14, 3))
    final_units: Mapped[Decimal | None] = mapped_column(Numeric(16, 3), nullable=True)
    computed_cost: Mapped[Decimal] = mapped_column(Numeric(16, 2), default=Decimal("0"))

    multiplier_id: Mapped[int | None] = mapped_column(
        ForeignKey("meter_multipliers.id", ondelete="SET NULL"),
        nullable=True,
    )
    multiplier_value_used: Mapped[Decimal] = mapped_column(Numeric(14, 4), default=Decimal("1"))
    tariff_id: Mapped[int | None] = mapped_column(
        ForeignKey("grid_tariffs.id", ondelete="SET NULL"),
        nullable=True,
    )
    tariff_rate_used: Mapped[Decimal | None] = mapped_column(Numeric(10, 4), nullable=True)

    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    alert_status: Mapped[AlertStatus] = mapped_column(String(20), default=AlertStatus.NORMAL)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        index=True,
    )

    # Relationships
    meter: Mapped["ElectricityMeter"] = relationship(back_populates="readings")
    multiplier: Mapped["MeterMultiplier | None"] = relationship()
    tariff: Mapped["GridTariff | None"] = relationship()
