"""Tests for properties, meters and multipliers."""

from decimal import Decimal

from fastapi.testclient import TestClient

from powerdesk.services.multiplier import compute_multiplier_value


class TestProperties:
    """Tests for property endpoints."""

    def test_create_and_get_property(self, client: TestClient) -> None:
        response = client.post("/api/properties", json={"name": "Tech Park", "code": "TP"})
        assert response.status_code == 201
        property_id = response.json()["id"]

        data = client.get(f"/api/properties/{property_id}").json()
        assert data["name"] == "Tech Park"
        assert data["code"] == "TP"
        assert data["is_active"] is True

    def test_get_unknown_property(self, client: TestClient) -> None:
        assert client.get("/api/properties/999").status_code == 404

    def test_list_properties(self, client: TestClient) -> None:
        client.post("/api/properties", json={"name": "B"})
        client.post("/api/properties", json={"name": "A"})
        names = [p["name"] for p in client.get("/api/properties").json()]
        assert names == ["A", "B"]


class TestMeters:
    """Tests for meter endpoints."""

    def test_meters_listed_by_name(self, client: TestClient, property_id: int) -> None:
        url = f"/api/properties/{property_id}/electricity-meters"
        client.post(url, json={"name": "Solar", "meter_type": "solar"})
        client.post(url, json={"name": "DG", "meter_type": "dg", "max_load_kw": "250"})

        meters = client.get(url).json()
        assert [m["name"] for m in meters] == ["DG", "Solar"]
        assert meters[0]["status"] == "active"
        assert Decimal(meters[0]["max_load_kw"]) == Decimal("250")

    def test_meter_for_unknown_property(self, client: TestClient) -> None:
        response = client.post("/api/properties/999/electricity-meters", json={"name": "X"})
        assert response.status_code == 404

    def test_toggle_status(self, client: TestClient, property_id: int, meter_id: int) -> None:
        url = f"/api/properties/{property_id}/electricity-meters/{meter_id}"
        response = client.patch(url, json={"status": "faulty"})
        assert response.status_code == 200
        assert response.json()["status"] == "faulty"

    def test_empty_update_rejected(self, client: TestClient, property_id: int, meter_id: int) -> None:
        url = f"/api/properties/{property_id}/electricity-meters/{meter_id}"
        assert client.patch(url, json={}).status_code == 422

    def test_invalid_status_rejected(self, client: TestClient, property_id: int, meter_id: int) -> None:
        url = f"/api/properties/{property_id}/electricity-meters/{meter_id}"
        assert client.patch(url, json={"status": "broken"}).status_code == 422

    def test_delete_meter(self, client: TestClient, property_id: int, meter_id: int) -> None:
        url = f"/api/properties/{property_id}/electricity-meters"
        assert client.delete(f"{url}/{meter_id}").status_code == 204
        assert client.get(url).json() == []

    def test_meter_scoped_to_property(self, client: TestClient, meter_id: int) -> None:
        other = client.post("/api/properties", json={"name": "Other"}).json()
        url = f"/api/properties/{other['id']}/electricity-meters/{meter_id}"
        assert client.patch(url, json={"status": "inactive"}).status_code == 404


class TestMultipliers:
    """Tests for meter multiplier versioning."""

    def test_compute_multiplier_value(self) -> None:
        value = compute_multiplier_value(Decimal("200"), Decimal("5"), Decimal("11000"), Decimal("110"))
        assert value == Decimal("4000")

    def test_compute_with_meter_constant(self) -> None:
        value = compute_multiplier_value(
            Decimal("100"), Decimal("5"), Decimal("110"), Decimal("110"), Decimal("0.5")
        )
        assert value == Decimal("10")

    def test_defaults_derive_value(self, client: TestClient, property_id: int, meter_id: int) -> None:
        response = client.post(
            f"/api/properties/{property_id}/meter-multipliers",
            json={"meter_id": meter_id, "effective_from": "2024-01-01"},
        )
        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["ct_ratio_primary"]) == Decimal("200")
        assert Decimal(data["multiplier_value"]) == Decimal("4000")

    def test_same_date_updates_existing(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        url = f"/api/properties/{property_id}/meter-multipliers"
        first = client.post(
            url, json={"meter_id": meter_id, "effective_from": "2024-01-01", "multiplier_value": "40"}
        ).json()
        response = client.post(
            url,
            json={
                "meter_id": meter_id,
                "effective_from": "2024-01-01",
                "multiplier_value": "80",
                "reason": "CT replaced",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == first["id"]
        assert Decimal(data["multiplier_value"]) == Decimal("80")
        assert data["reason"] == "CT replaced"

    def test_history_and_active_lookup(
        self, client: TestClient, property_id: int, meter_id: int
    ) -> None:
        url = f"/api/properties/{property_id}/meter-multipliers"
        client.post(url, json={"meter_id": meter_id, "effective_from": "2024-01-01", "multiplier_value": "40"})
        client.post(url, json={"meter_id": meter_id, "effective_from": "2024-02-01", "multiplier_value": "60"})

        history = client.get(url, params={"meterId": meter_id}).json()
        assert [h["effective_from"] for h in history] == ["2024-02-01", "2024-01-01"]
        assert history[1]["effective_to"] == "2024-01-31"

        active = client.get(url, params={"meterId": meter_id, "date": "2024-01-15"}).json()
        assert Decimal(active["multiplier_value"]) == Decimal("40")

        assert len(client.get(url).json()) == 2

    def test_meter_must_belong_to_property(self, client: TestClient, meter_id: int) -> None:
        other = client.post("/api/properties", json={"name": "Other"}).json()
        response = client.post(
            f"/api/properties/{other['id']}/meter-multipliers",
            json={"meter_id": meter_id, "effective_from": "2024-01-01"},
        )
        assert response.status_code == 404
