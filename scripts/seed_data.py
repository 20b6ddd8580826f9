"""Seed script to populate the database with sample data."""

from datetime import date, timedelta
from decimal import Decimal

from powerdesk.core.database import Base, SessionLocal, engine
from powerdesk.models.enums import MeterType
from powerdesk.models.property import Property
from powerdesk.schemas.meter import MeterCreate
from powerdesk.schemas.multiplier import MultiplierCreate
from powerdesk.schemas.property import PropertyCreate
from powerdesk.schemas.reading import ReadingCreate
from powerdesk.schemas.tariff import GridTariffCreate
from powerdesk.services import meter, multiplier, property, reading, tariff


def seed_database() -> None:
    """Seed the database with one property and 45 days of readings."""
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        if db.query(Property).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        property_obj = property.create_property(
            db,
            PropertyCreate(name="Tech Park Tower A", code="TPA", address="Outer Ring Road, Bengaluru"),
        )
        print(f"Created property: {property_obj.name} (ID: {property_obj.id})")

        grid = meter.create_meter(
            db,
            property_obj.id,
            MeterCreate(name="Grid Main", meter_number="HT-001", meter_type=MeterType.MAIN),
        )
        dg = meter.create_meter(
            db,
            property_obj.id,
            MeterCreate(name="DG Set 1", meter_number="DG-001", meter_type=MeterType.DG),
        )
        solar = meter.create_meter(
            db,
            property_obj.id,
            MeterCreate(name="Rooftop Solar", meter_type=MeterType.SOLAR),
        )
        print("Created 3 meters: grid, dg, solar")

        start = date.today() - timedelta(days=44)

        multiplier.save_multiplier(
            db,
            property_obj.id,
            MultiplierCreate(meter_id=grid.id, effective_from=start, multiplier_value=Decimal("40")),
        )
        # Readings in the first two weeks predate the tariff and stay unpriced
        tariff.create_tariff(
            db,
            property_obj.id,
            GridTariffCreate(
                rate_per_unit=Decimal("8.50"),
                effective_from=start + timedelta(days=14),
                utility_provider="BESCOM",
            ),
        )

        closings = {grid.id: Decimal("12000"), dg.id: Decimal("800"), solar.id: Decimal("3000")}
        for day in range(45):
            batch = []
            for meter_id, daily in (
                (grid.id, Decimal("45") + Decimal(day % 5)),
                (dg.id, Decimal(day % 3)),
                (solar.id, Decimal("60") + Decimal(day % 4) * 5),
            ):
                opening = closings[meter_id]
                closings[meter_id] = opening + daily
                batch.append(
                    ReadingCreate(
                        meter_id=meter_id,
                        reading_date=start + timedelta(days=day),
                        opening_reading=opening,
                        closing_reading=closings[meter_id],
                        notes=f"Day {day + 1} reading",
                    )
                )
            reading.create_readings(db, property_obj.id, batch)

        print("Created 135 readings (45 days x 3 meters)")
        print("\nSeed data created successfully!")
        print(f"\nProperty ID: {property_obj.id}")


if __name__ == "__main__":
    seed_database()
