"""Tests for reading logging, pricing, listing and deletion."""

from datetime import date, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient


def _readings_url(property_id: int) -> str:
    return f"/api/properties/{property_id}/electricity-readings"


def _add_tariff(client: TestClient, property_id: int, rate: str, effective_from: date) -> dict:
    response = client.post(
        f"/api/properties/{property_id}/grid-tariffs",
        json={"rate_per_unit": rate, "effective_from": effective_from.isoformat()},
    )
    assert response.status_code == 201
    return response.json()


class TestCreateReading:
    """Tests for logging single and batch readings."""

    def test_reading_without_tariff_has_zero_cost(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        response = client.post(
            _readings_url(property_id),
            json={
                "meter_id": meter_id,
                "reading_date": "2024-01-01",
                "opening_reading": "1000",
                "closing_reading": "1100",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["computed_units"]) == Decimal("100")
        assert Decimal(data["final_units"]) == Decimal("100")
        assert Decimal(data["computed_cost"]) == Decimal("0")
        assert data["tariff_id"] is None
        assert Decimal(data["multiplier_value_used"]) == Decimal("1")
        assert data["meter"]["name"] == "Grid Main"

    def test_reading_is_priced_with_tariff_and_multiplier(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        tariff = _add_tariff(client, property_id, "8.5", date(2024, 1, 1))
        client.post(
            f"/api/properties/{property_id}/meter-multipliers",
            json={"meter_id": meter_id, "effective_from": "2024-01-01", "multiplier_value": "2"},
        )

        response = client.post(
            _readings_url(property_id),
            json={
                "meter_id": meter_id,
                "reading_date": "2024-01-05",
                "opening_reading": "500",
                "closing_reading": "510",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["computed_units"]) == Decimal("10")
        assert Decimal(data["final_units"]) == Decimal("20")
        assert Decimal(data["computed_cost"]) == Decimal("170.00")
        assert data["tariff_id"] == tariff["id"]
        assert Decimal(data["tariff_rate_used"]) == Decimal("8.5")

    def test_reading_before_tariff_is_unpriced(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        _add_tariff(client, property_id, "8", date(2024, 2, 1))
        response = client.post(
            _readings_url(property_id),
            json={
                "meter_id": meter_id,
                "reading_date": "2024-01-15",
                "opening_reading": "0",
                "closing_reading": "10",
            },
        )
        assert Decimal(response.json()["computed_cost"]) == Decimal("0")

    def test_last_reading_is_updated(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        client.post(
            _readings_url(property_id),
            json={"meter_id": meter_id, "opening_reading": "10", "closing_reading": "42.5"},
        )
        meters = client.get(f"/api/properties/{property_id}/electricity-meters").json()
        assert Decimal(meters[0]["last_reading"]) == Decimal("42.5")

    def test_reading_date_defaults_to_today(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        response = client.post(
            _readings_url(property_id),
            json={"meter_id": meter_id, "opening_reading": "0", "closing_reading": "1"},
        )
        assert response.json()["reading_date"] == date.today().isoformat()

    def test_closing_below_opening_rejected(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        response = client.post(
            _readings_url(property_id),
            json={"meter_id": meter_id, "opening_reading": "100", "closing_reading": "99"},
        )
        assert response.status_code == 422

    def test_unknown_meter_rejected(self, client: TestClient, property_id: int) -> None:
        response = client.post(
            _readings_url(property_id),
            json={"meter_id": 999, "opening_reading": "0", "closing_reading": "1"},
        )
        assert response.status_code == 404

    def test_batch_submission(self, client: TestClient, property_id: int, meter_id: int) -> None:
        solar = client.post(
            f"/api/properties/{property_id}/electricity-meters",
            json={"name": "Rooftop Solar", "meter_type": "solar"},
        ).json()

        response = client.post(
            _readings_url(property_id),
            json={
                "readings": [
                    {"meter_id": meter_id, "opening_reading": "100", "closing_reading": "150"},
                    {"meter_id": solar["id"], "opening_reading": "0", "closing_reading": "20"},
                ]
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert len(data) == 2
        assert {Decimal(r["computed_units"]) for r in data} == {Decimal("50"), Decimal("20")}


class TestListReadings:
    """Tests for reading queries."""

    def _log(self, client: TestClient, property_id: int, meter_id: int, day: date) -> None:
        response = client.post(
            _readings_url(property_id),
            json={
                "meter_id": meter_id,
                "reading_date": day.isoformat(),
                "opening_reading": "0",
                "closing_reading": "1",
            },
        )
        assert response.status_code == 201

    def test_date_range_and_order(self, client: TestClient, property_id: int, meter_id: int) -> None:
        for day in (date(2024, 1, 1), date(2024, 1, 10), date(2024, 2, 1)):
            self._log(client, property_id, meter_id, day)

        response = client.get(
            _readings_url(property_id),
            params={"startDate": "2024-01-01", "endDate": "2024-01-31"},
        )
        assert response.status_code == 200
        assert [r["reading_date"] for r in response.json()] == ["2024-01-10", "2024-01-01"]

    def test_period_today(self, client: TestClient, property_id: int, meter_id: int) -> None:
        today = date.today()
        self._log(client, property_id, meter_id, today)
        self._log(client, property_id, meter_id, today - timedelta(days=3))

        data = client.get(_readings_url(property_id), params={"period": "today"}).json()
        assert [r["reading_date"] for r in data] == [today.isoformat()]

        data = client.get(_readings_url(property_id), params={"period": "week"}).json()
        assert len(data) == 2

    def test_meter_filter(self, client: TestClient, property_id: int, meter_id: int) -> None:
        other = client.post(
            f"/api/properties/{property_id}/electricity-meters",
            json={"name": "DG Set", "meter_type": "dg"},
        ).json()
        self._log(client, property_id, meter_id, date(2024, 1, 1))
        self._log(client, property_id, other["id"], date(2024, 1, 1))

        data = client.get(_readings_url(property_id), params={"meterId": other["id"]}).json()
        assert [r["meter_id"] for r in data] == [other["id"]]

    def test_multiplier_and_tariff_are_embedded(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        tariff = _add_tariff(client, property_id, "7.25", date(2024, 1, 1))
        multiplier = client.post(
            f"/api/properties/{property_id}/meter-multipliers",
            json={"meter_id": meter_id, "effective_from": "2024-01-01", "multiplier_value": "40"},
        ).json()
        self._log(client, property_id, meter_id, date(2024, 1, 2))
        self._log(client, property_id, meter_id, date(2023, 12, 31))

        newer, older = client.get(_readings_url(property_id)).json()
        assert newer["multiplier"]["id"] == multiplier["id"]
        assert Decimal(newer["multiplier"]["multiplier_value"]) == Decimal("40")
        assert Decimal(newer["multiplier"]["ct_ratio_primary"]) == Decimal("200")
        assert newer["tariff"]["id"] == tariff["id"]
        assert Decimal(newer["tariff"]["rate_per_unit"]) == Decimal("7.25")
        assert older["multiplier"] is None
        assert older["tariff"] is None


class TestDeleteReading:
    """Tests for deleting readings."""

    def test_delete_recalibrates_last_reading(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        first = client.post(
            _readings_url(property_id),
            json={
                "meter_id": meter_id,
                "reading_date": "2024-01-01",
                "opening_reading": "0",
                "closing_reading": "100",
            },
        ).json()
        second = client.post(
            _readings_url(property_id),
            json={
                "meter_id": meter_id,
                "reading_date": "2024-01-02",
                "opening_reading": "100",
                "closing_reading": "180",
            },
        ).json()

        response = client.delete(_readings_url(property_id), params={"id": second["id"]})
        assert response.status_code == 200
        assert response.json() == {"success": True}
        meter = client.get(f"/api/properties/{property_id}/electricity-meters").json()[0]
        assert Decimal(meter["last_reading"]) == Decimal("100")

        client.delete(_readings_url(property_id), params={"id": first["id"]})
        meter = client.get(f"/api/properties/{property_id}/electricity-meters").json()[0]
        assert Decimal(meter["last_reading"]) == Decimal("0")

    def test_delete_unknown_reading(self, client: TestClient, property_id: int) -> None:
        response = client.delete(_readings_url(property_id), params={"id": 12345})
        assert response.status_code == 404

    def test_delete_requires_id(self, client: TestClient, property_id: int) -> None:
        response = client.delete(_readings_url(property_id))
        assert response.status_code == 422
