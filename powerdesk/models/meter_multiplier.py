"""Meter multiplier database model - time-versioned CT/PT ratios."""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from powerdesk.core.database import Base

if TYPE_CHECKING:
    from powerdesk.models.meter import ElectricityMeter


class MeterMultiplier(Base):
    """Multiplier version applied to a meter's raw units.

    A version is active from ``effective_from`` until ``effective_to``
    (inclusive), or indefinitely when ``effective_to`` is null.
    """

    __tablename__ = "meter_multipliers"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    meter_id: Mapped[int] = mapped_column(ForeignKey("electricity_meters.id"), index=True)

    ct_ratio_primary: Mapped[Decimal] = mapped_column(Numeric(12, 3), default=Decimal("200"))
    ct_ratio_secondary: Mapped[Decimal] = mapped_column(Numeric(12, 3), default=Decimal("5"))
    pt_ratio_primary: Mapped[Decimal] = mapped_column(Numeric(12, 3), default=Decimal("11000"))
    pt_ratio_secondary: Mapped[Decimal] = mapped_column(Numeric(12, 3), default=Decimal("110"))
    meter_constant: Mapped[Decimal | None] = mapped_column(Numeric(12, 4), nullable=True)
    multiplier_value: Mapped[Decimal] = mapped_column(Numeric(14, 4))

    effective_from: Mapped[date] = mapped_column(index=True)
    effective_to: Mapped[date | None] = mapped_column(nullable=True)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Relationships
    meter: Mapped["ElectricityMeter"] = relationship(back_populates="multipliers")
