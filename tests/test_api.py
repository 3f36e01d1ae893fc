"""Tests for the HTTP API."""

import pytest
from decimal import Decimal

from wedplan.domain.entities import PaymentStatus


def create_cost(client, **fields):
    body = {"name": "Venue", "value": 1000, "total_amount": 10000}
    body.update(fields)
    response = client.post("/costs", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(api_client):
    """Test the health endpoint."""
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestCosts:
    """Tests for /costs."""

    def test_create_and_get(self, api_client):
        """Test that created costs expose derived payment fields."""
        cost = create_cost(api_client, notes="Castle", due_date="2025-05-01")

        assert cost["value"] == 1000
        assert cost["total_amount"] == 10000
        assert cost["target_amount"] == 10000
        assert cost["amount_paid"] == 0
        assert cost["payment_status"] == "unpaid"
        assert cost["due_date"] == "2025-05-01"

        response = api_client.get(f"/costs/{cost['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Venue"

    def test_list_with_status_filter(self, api_client):
        """Test listing costs, optionally by payment status."""
        paid = create_cost(api_client, name="Cake", value=500, total_amount=None)
        create_cost(api_client)
        api_client.post("/payments", json={"cost_id": paid["id"], "amount": 500})

        assert len(api_client.get("/costs").json()) == 2
        filtered = api_client.get("/costs", params={"payment_status": "paid"}).json()
        assert [c["id"] for c in filtered] == [paid["id"]]

    def test_create_invalid_value(self, api_client):
        """Test that a non-positive value is a 400."""
        response = api_client.post("/costs", json={"name": "Cake", "value": 0})
        assert response.status_code == 400
        assert "positive" in response.json()["error"]

    @pytest.mark.parametrize("value", ["1e30", 1e30])
    def test_create_value_beyond_column_range(self, api_client, value):
        """Test that a value too large to store is a 400, not a 500."""
        response = api_client.post("/costs", json={"name": "Cake", "value": value})
        assert response.status_code == 400
        assert "may not exceed" in response.json()["error"]
        assert api_client.get("/costs").json() == []

    def test_create_missing_name(self, api_client):
        """Test that schema validation failures are a 400, not a 422."""
        response = api_client.post("/costs", json={"value": 10})
        assert response.status_code == 400
        assert "name" in response.json()["error"]

    @pytest.mark.parametrize("field,value", [("amount_paid", 500), ("payment_status", "paid")])
    def test_derived_fields_rejected(self, api_client, field, value):
        """Test that clients cannot set the derived payment fields."""
        cost = create_cost(api_client)

        response = api_client.put(f"/costs/{cost['id']}", json={field: value})
        assert response.status_code == 400

        response = api_client.post("/costs", json={"name": "Cake", "value": 10, field: value})
        assert response.status_code == 400

        assert api_client.get(f"/costs/{cost['id']}").json()["amount_paid"] == 0

    def test_update_target_recomputes(self, api_client):
        """Test that changing the target updates the status."""
        cost = create_cost(api_client)
        api_client.post("/payments", json={"cost_id": cost["id"], "amount": 4000})

        response = api_client.put(f"/costs/{cost['id']}", json={"total_amount": 4000})

        assert response.status_code == 200
        assert response.json()["payment_status"] == "paid"

    def test_update_clears_total(self, api_client):
        """Test that an explicit null clears total_amount."""
        cost = create_cost(api_client)
        response = api_client.put(f"/costs/{cost['id']}", json={"total_amount": None})
        assert response.status_code == 200
        assert response.json()["total_amount"] is None
        assert response.json()["target_amount"] == 1000

    def test_not_found(self, api_client):
        """Test 404s for a missing cost."""
        assert api_client.get("/costs/999").status_code == 404
        assert api_client.put("/costs/999", json={"name": "X"}).status_code == 404
        assert api_client.put("/costs/999", json={"category_id": 999}).status_code == 404
        response = api_client.delete("/costs/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Cost 999 not found"}

    def test_delete_cascades(self, api_client):
        """Test that deleting a cost removes its payments."""
        cost = create_cost(api_client)
        api_client.post("/payments", json={"cost_id": cost["id"], "amount": 100})

        response = api_client.delete(f"/costs/{cost['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "payments_deleted": 1}
        assert api_client.get("/payments", params={"cost_id": cost["id"]}).json() == []

    def test_reconcile(self, api_client, temp_db):
        """Test repairing a drifted aggregate through the API."""
        cost = create_cost(api_client)
        api_client.post("/payments", json={"cost_id": cost["id"], "amount": 2500})
        temp_db.save_payment_summary(cost["id"], Decimal("0.00"), PaymentStatus.UNPAID)

        response = api_client.post(f"/costs/{cost['id']}/reconcile")

        assert response.status_code == 200
        assert response.json()["amount_paid"] == 2500
        assert response.json()["payment_status"] == "partial"


class TestPayments:
    """Tests for /payments."""

    def test_add_and_list(self, api_client):
        """Test recording payments and listing them with numeric amounts."""
        cost = create_cost(api_client)

        response = api_client.post(
            "/payments", json={"cost_id": cost["id"], "amount": 3000, "note": "Deposit"}
        )
        assert response.status_code == 201
        payment = response.json()
        assert payment["amount"] == 3000
        assert isinstance(payment["amount"], (int, float))
        assert payment["note"] == "Deposit"

        response = api_client.get("/payments", params={"cost_id": cost["id"]})
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [payment["id"]]

        updated = api_client.get(f"/costs/{cost['id']}").json()
        assert updated["amount_paid"] == 3000
        assert updated["payment_status"] == "partial"

    def test_amount_as_string(self, api_client):
        """Test that numeric strings are accepted as amounts."""
        cost = create_cost(api_client)
        response = api_client.post("/payments", json={"cost_id": cost["id"], "amount": "250.50"})
        assert response.status_code == 201
        assert response.json()["amount"] == 250.5

    def test_list_orders_offsets_by_instant(self, api_client):
        """Test that dates sent with different offsets list in true time order."""
        cost = create_cost(api_client)
        early = api_client.post(
            "/payments",
            json={"cost_id": cost["id"], "amount": 100, "payment_date": "2025-01-01T10:00:00+05:00"},
        ).json()
        late = api_client.post(
            "/payments",
            json={"cost_id": cost["id"], "amount": 200, "payment_date": "2025-01-01T06:00:00Z"},
        ).json()

        listed = api_client.get("/payments", params={"cost_id": cost["id"]}).json()

        assert [p["id"] for p in listed] == [late["id"], early["id"]]

    def test_list_requires_cost_id(self, api_client):
        """Test that listing without a cost is a 400."""
        response = api_client.get("/payments")
        assert response.status_code == 400
        assert "cost_id" in response.json()["error"]

    def test_exceeds_remaining(self, api_client):
        """Test that overpayment is a 400 carrying the remaining balance."""
        cost = create_cost(api_client)
        api_client.post("/payments", json={"cost_id": cost["id"], "amount": 10000})

        response = api_client.post("/payments", json={"cost_id": cost["id"], "amount": 1})

        assert response.status_code == 400
        assert response.json()["remaining"] == 0

    @pytest.mark.parametrize("amount", [0, -5, "abc", 1.234, "1e30"])
    def test_invalid_amount(self, api_client, amount):
        """Test that invalid amounts are a 400."""
        cost = create_cost(api_client)
        response = api_client.post("/payments", json={"cost_id": cost["id"], "amount": amount})
        assert response.status_code == 400

    def test_unknown_cost(self, api_client):
        """Test that paying a missing cost is a 404."""
        response = api_client.post("/payments", json={"cost_id": 999, "amount": 10})
        assert response.status_code == 404

    def test_unknown_costs_leave_no_locks_behind(self, api_client, temp_db):
        """Test that requests for many missing costs do not grow the lock registry."""
        for cost_id in range(1000, 1200):
            response = api_client.post("/payments", json={"cost_id": cost_id, "amount": 10})
            assert response.status_code == 404

        assert len(temp_db._cost_locks) == 0

    def test_delete(self, api_client):
        """Test deleting a payment returns the reconciled cost state."""
        cost = create_cost(api_client, value=500, total_amount=None)
        payment = api_client.post("/payments", json={"cost_id": cost["id"], "amount": 500}).json()
        assert api_client.get(f"/costs/{cost['id']}").json()["payment_status"] == "paid"

        response = api_client.delete(f"/payments/{payment['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["amount_paid"] == 0
        assert body["payment_status"] == "unpaid"

    def test_delete_unknown(self, api_client):
        """Test that deleting a missing payment is a 404."""
        response = api_client.delete("/payments/999")
        assert response.status_code == 404


class TestCategories:
    """Tests for /categories."""

    def test_crud(self, api_client):
        """Test create, list, rename and delete."""
        response = api_client.post("/categories", json={"name": "Music"})
        assert response.status_code == 201
        category = response.json()

        assert [c["name"] for c in api_client.get("/categories").json()] == ["Music"]

        response = api_client.put(f"/categories/{category['id']}", json={"name": "Band"})
        assert response.status_code == 200
        assert response.json()["name"] == "Band"

        response = api_client.delete(f"/categories/{category['id']}")
        assert response.status_code == 200
        assert api_client.get("/categories").json() == []

    def test_duplicate_is_conflict(self, api_client):
        """Test that a duplicate name is a 409."""
        api_client.post("/categories", json={"name": "Music"})
        response = api_client.post("/categories", json={"name": "Music"})
        assert response.status_code == 409

    def test_delete_in_use(self, api_client):
        """Test that deleting a referenced category is a 409 with a count."""
        category = api_client.post("/categories", json={"name": "Venue"}).json()
        create_cost(api_client, category_id=category["id"])
        create_cost(api_client, name="Chapel", category_id=category["id"])

        response = api_client.delete(f"/categories/{category['id']}")

        assert response.status_code == 409
        assert response.json()["count"] == 2
        assert "2 costs" in response.json()["error"]


def test_budget_summary(api_client):
    """Test the budget summary uses the configured total budget."""
    category = api_client.post("/categories", json={"name": "Venue"}).json()
    cost = create_cost(api_client, category_id=category["id"])
    api_client.post("/payments", json={"cost_id": cost["id"], "amount": 5000})

    response = api_client.get("/budget/summary")

    assert response.status_code == 200
    body = response.json()
    assert body["planned"] == 10000
    assert body["paid"] == 5000
    assert body["total_budget"] == 50000
    assert body["percent_used"] == 10
    assert body["categories"][0]["category_name"] == "Venue"
    assert body["status_counts"] == {"unpaid": 0, "partial": 1, "paid": 0}

    override = api_client.get("/budget/summary", params={"total_budget": 10000}).json()
    assert override["percent_used"] == 50
