"""
Tests for pre-production inventory endpoints (/api/v1/pre-production)
"""
import pytest
from datetime import date

BASE = "/api/v1/pre-production"


class TestPreProduction:

    @pytest.mark.api
    def test_create_defaults_date_and_logs(self, client):
        response = client.post(BASE, json={
            "name": "PIN-YZF-002", "type": "pin", "size": "7", "quantity": 40,
        })

        assert response.status_code == 201
        assert response.json()["date_updated"] == date.today().isoformat()

        logs = client.get("/api/v1/activity-logs", params={"module": "pre-production"}).json()
        assert logs[0]["action"] == "CREATE"
        assert logs[0]["entity_name"] == "PIN-YZF-002"

    @pytest.mark.api
    def test_invalid_type_rejected(self, client):
        response = client.post(BASE, json={"name": "X", "type": "gear", "quantity": 1})
        assert response.status_code == 422

    @pytest.mark.api
    def test_negative_quantity_rejected(self, client):
        response = client.post(BASE, json={"name": "X", "type": "pin", "quantity": -1})
        assert response.status_code == 422

    @pytest.mark.api
    def test_filter_by_type(self, client, pin_stock, ball_bearing_stock):
        rows = client.get(BASE, params={"type": "ballBearing"}).json()
        assert [r["id"] for r in rows] == [ball_bearing_stock.id]

    @pytest.mark.api
    def test_update_logs_change(self, client, pin_stock):
        response = client.put(f"{BASE}/{pin_stock.id}", json={"quantity": 55})

        assert response.status_code == 200
        assert response.json()["quantity"] == 55

        log = client.get("/api/v1/activity-logs", params={"module": "pre-production"}).json()[0]
        assert log["action"] == "UPDATE"
        assert log["details"] == "Quantity: 40 → 55"

    @pytest.mark.api
    def test_delete_and_404(self, client, pin_stock):
        assert client.delete(f"{BASE}/{pin_stock.id}").status_code == 200
        assert client.get(f"{BASE}/{pin_stock.id}").status_code == 404
        assert client.delete(f"{BASE}/{pin_stock.id}").status_code == 404

    @pytest.mark.api
    @pytest.mark.parametrize("field", ["name", "type", "quantity"])
    def test_null_on_required_column_rejected(self, client, pin_stock, field):
        response = client.put(f"{BASE}/{pin_stock.id}", json={field: None})

        assert response.status_code == 422
        assert client.get(f"{BASE}/{pin_stock.id}").json()["quantity"] == 40

    @pytest.mark.api
    def test_null_clears_optional_column(self, client, pin_stock):
        response = client.put(f"{BASE}/{pin_stock.id}", json={"size": None})

        assert response.status_code == 200
        assert response.json()["size"] is None
