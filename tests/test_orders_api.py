"""Tests for checkout, the per-phone cooldown and order lookup."""

import re

from sqlalchemy.exc import OperationalError

from conftest import PHONE, make_order
from services.order_service.repository import OrderRepository

ORDER_ID = re.compile(r"^ORD-20261017-\d{5}$")


class TestCreateOrder:
    def test_creates_pending_cod_order(self, client):
        response = client.post("/orders", json=make_order())
        assert response.status_code == 201
        data = response.json()
        assert ORDER_ID.match(data["order_id"])
        assert data["total_amount"] == 1100
        assert data["order_status"] == "Pending"
        assert data["payment_method"] == "COD"
        assert data["payment_status"] == "Pending"
        assert data["alternate_phone"] is None
        assert [item["subtotal"] for item in data["items"]] == [500, 600]

    def test_total_is_computed_when_not_sent(self, client):
        payload = make_order()
        del payload["total_amount"]
        response = client.post("/orders", json=payload)
        assert response.status_code == 201
        assert response.json()["total_amount"] == 1100

    def test_mismatched_total_is_rejected(self, client):
        response = client.post("/orders", json=make_order(total_amount=999))
        assert response.status_code == 422
        assert response.json()["fields"] == {"total_amount": "Total does not match the items in the order"}

    def test_order_is_retrievable(self, client, placed_order):
        response = client.get(f"/orders/{placed_order['order_id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["customer_phone"] == PHONE
        assert len(data["items"]) == 2

    def test_unknown_order(self, client):
        response = client.get("/orders/ORD-20261017-00000")
        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "Order not found"}


class TestValidation:
    def test_bad_phone(self, client):
        response = client.post("/orders", json=make_order(phone="12345"))
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "validation_failed"
        assert data["fields"]["customer_phone"] == "Enter a valid 10-digit mobile number"

    def test_address_without_pincode(self, client):
        response = client.post("/orders", json=make_order(delivery_address="Somewhere on MG Road, Bengaluru"))
        assert response.status_code == 422
        assert "delivery_address" in response.json()["fields"]

    def test_bad_email_and_name_reported_together(self, client):
        response = client.post("/orders", json=make_order(customer_email="nope", customer_name="X1"))
        fields = response.json()["fields"]
        assert set(fields) >= {"customer_email", "customer_name"}

    def test_quantity_limit(self, client):
        payload = make_order()
        payload["items"][0]["quantity"] = 6
        del payload["total_amount"]
        response = client.post("/orders", json=payload)
        assert response.status_code == 422
        assert "items.0.quantity" in response.json()["fields"]

    def test_empty_cart(self, client):
        response = client.post("/orders", json=make_order(items=[], total_amount=0))
        assert response.status_code == 422
        assert "items" in response.json()["fields"]

    def test_invalid_order_does_not_start_cooldown(self, client):
        client.post("/orders", json=make_order(phone="98765"))
        assert client.post("/orders", json=make_order()).status_code == 201


class TestCooldown:
    def test_resubmit_within_window_is_rejected(self, client, clock, placed_order):
        clock.advance(10)
        response = client.post("/orders", json=make_order())
        assert response.status_code == 429
        data = response.json()
        assert data["error"] == "rate_limited"
        assert data["retry_after"] == 50
        assert data["message"] == "Please wait 50 seconds before placing another order"
        assert response.headers["Retry-After"] == "50"

    def test_rejected_order_is_not_persisted(self, client, clock, admin_headers, placed_order):
        clock.advance(10)
        client.post("/orders", json=make_order())
        orders = client.get("/admin/orders", headers=admin_headers).json()
        assert [o["order_id"] for o in orders] == [placed_order["order_id"]]

    def test_after_window_a_second_order_is_created(self, client, clock, placed_order):
        clock.advance(61)
        response = client.post("/orders", json=make_order())
        assert response.status_code == 201
        assert response.json()["order_id"] != placed_order["order_id"]

    def test_window_is_exactly_sixty_seconds(self, client, clock, placed_order):
        clock.advance(59.5)
        response = client.post("/orders", json=make_order())
        assert response.status_code == 429
        assert response.json()["retry_after"] == 1

        clock.advance(0.5)
        assert client.post("/orders", json=make_order()).status_code == 201

    def test_uses_most_recent_order(self, client, clock, placed_order):
        clock.advance(61)
        client.post("/orders", json=make_order())
        clock.advance(20)
        response = client.post("/orders", json=make_order())
        assert response.json()["retry_after"] == 40

    def test_other_phones_are_unaffected(self, client, clock, placed_order):
        clock.advance(1)
        assert client.post("/orders", json=make_order(phone="9123456780")).status_code == 201

    def test_check_endpoint_reports_wait(self, client, clock):
        response = client.post("/orders/check-cooldown", json={"phone": PHONE})
        assert response.status_code == 200
        assert response.json() == {"success": True}

        client.post("/orders", json=make_order())
        clock.advance(15)
        response = client.post("/orders/check-cooldown", json={"phone": PHONE})
        assert response.status_code == 429
        assert response.json()["message"] == "Please wait 45 seconds before placing another order"


class TestPersistenceFailure:
    def test_storage_error_is_generic_500(self, client, monkeypatch):
        async def broken(db, order):
            raise OperationalError("INSERT INTO orders", {}, Exception("database is locked"))

        monkeypatch.setattr(OrderRepository, "create_order", staticmethod(broken))
        response = client.post("/orders", json=make_order())
        assert response.status_code == 500
        assert response.json() == {"error": "persistence_failed", "message": "Failed to create order"}


class TestTracking:
    def test_new_order_is_on_first_step(self, client, placed_order):
        response = client.get(f"/orders/{placed_order['order_id']}/tracking")
        assert response.status_code == 200
        data = response.json()
        assert data["order_id"] == placed_order["order_id"]
        assert data["is_refund"] is False
        assert data["current_step"] == 0
        assert [s["label"] for s in data["steps"]] == ["Order Placed", "Preparing", "Out for Delivery", "Delivered"]

    def test_unknown_order(self, client):
        assert client.get("/orders/ORD-1/tracking").status_code == 404
