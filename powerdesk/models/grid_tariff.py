"""Grid tariff database model - time-versioned electricity rates."""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from powerdesk.core.database import Base

if TYPE_CHECKING:
    from powerdesk.models.property import Property


class GridTariff(Base):
    """Electricity rate for a property over a date range.

    At most one version is active on any date: creating a new version
    closes the currently open one on the day before it takes effect.
    """

    __tablename__ = "grid_tariffs"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)
    utility_provider: Mapped[str | None] = mapped_column(String(100), nullable=True)
    rate_per_unit: Mapped[Decimal] = mapped_column(Numeric(10, 4))
    unit_type: Mapped[str] = mapped_column(String(10), default="kVAh")
    effective_from: Mapped[date] = mapped_column(index=True)
    effective_to: Mapped[date | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Relationships
    parent_property: Mapped["Property"] = relationship(back_populates="tariffs")
