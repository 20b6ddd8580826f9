"""Property database model."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from powerdesk.core.database import Base

if TYPE_CHECKING:
    from powerdesk.models.grid_tariff import GridTariff
    from powerdesk.models.meter import ElectricityMeter


class Property(Base):
    """Facility property that meters and tariffs belong to."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    is_active: Mapped[bool] = mapped_column(default=True)

    # Relationships
    meters: Mapped[list["ElectricityMeter"]] = relationship(
        back_populates="parent_property",
        cascade="all, delete-orphan",
    )
    tariffs: Mapped[list["GridTariff"]] = relationship(
        back_populates="parent_property",
        cascade="all, delete-orphan",
    )
