"""Tests for the health and analytics endpoints."""

from datetime import date
from decimal import Decimal

from fastapi.testclient import TestClient


def test_health_check(client: TestClient) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "powerdesk"}


class TestAnalyticsEndpoint:
    """Tests for server-side dashboard analytics."""

    def _url(self, property_id: int) -> str:
        return f"/api/properties/{property_id}/electricity-analytics"

    def test_empty_property(self, client: TestClient, property_id: int) -> None:
        response = client.get(self._url(property_id))
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["month"]["cost"]) == 0
        assert Decimal(data["active_tariff_rate"]) == 0
        assert data["trend_days"] == 7
        assert len(data["trend"]) == 7
        assert data["breakdown"] == []

    def test_today_readings_are_aggregated(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        today = date.today()
        client.post(
            f"/api/properties/{property_id}/grid-tariffs",
            json={"rate_per_unit": "8", "effective_from": today.isoformat()},
        )
        client.post(
            f"/api/properties/{property_id}/electricity-readings",
            json={"meter_id": meter_id, "opening_reading": "0", "closing_reading": "100"},
        )

        data = client.get(self._url(property_id), params={"trendDays": 30}).json()
        assert Decimal(data["active_tariff_rate"]) == Decimal("8")
        assert Decimal(data["today"]["units"]) == Decimal("100")
        assert Decimal(data["today"]["cost"]) == Decimal("800")
        assert Decimal(data["month"]["units"]) == Decimal("100")
        assert Decimal(data["averages"]["units"]) == Decimal("100")
        assert len(data["trend"]) == 30
        assert data["trend"][-1]["date"] == today.isoformat()
        assert Decimal(data["trend"][-1]["cost"]) == Decimal("800")
        assert data["breakdown"][0]["name"] == "Grid Main"
        assert data["breakdown"][0]["percentage"] == 100

    def test_flagged_readings_become_alerts(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        client.post(
            f"/api/properties/{property_id}/electricity-readings",
            json={
                "readings": [
                    {"meter_id": meter_id, "opening_reading": "0", "closing_reading": "10"},
                    {
                        "meter_id": meter_id,
                        "opening_reading": "10",
                        "closing_reading": "90",
                        "alert_status": "critical",
                    },
                ]
            },
        )

        alerts = client.get(self._url(property_id)).json()["alerts"]
        assert len(alerts) == 1
        assert alerts[0]["severity"] == "critical"
        assert alerts[0]["meter_name"] == "Grid Main"
        assert Decimal(alerts[0]["units"]) == Decimal("80")
        assert alerts[0]["reading_date"] == date.today().isoformat()

    def test_meter_filter(self, client: TestClient, property_id: int, meter_id: int) -> None:
        client.post(
            f"/api/properties/{property_id}/electricity-readings",
            json={"meter_id": meter_id, "opening_reading": "0", "closing_reading": "10"},
        )
        data = client.get(self._url(property_id), params={"meterId": meter_id + 100}).json()
        assert Decimal(data["today"]["units"]) == 0
        assert data["meter_id"] == str(meter_id + 100)

    def test_invalid_trend_window(self, client: TestClient, property_id: int) -> None:
        response = client.get(self._url(property_id), params={"trendDays": 14})
        assert response.status_code == 400

    def test_unknown_property(self, client: TestClient) -> None:
        assert client.get(self._url(999)).status_code == 404
