"""
Component tests for checkout and order history
"""
import pytest
from fastapi.testclient import TestClient

from models.log import Log
from models.order import Order


def shipping_address(**overrides):
    address = {
        "full_name": "Ahmed Khan",
        "email": "ahmed@example.com",
        "phone": "+91 98765 43210",
        "address": "12 Market Road",
        "city": "Hyderabad",
        "postal_code": "500001",
        "country": "India",
    }
    address.update(overrides)
    return address


def fill_scenario_cart(client, headers, catalog, measurements):
    cotton = catalog["Egyptian Cotton Fabric"]
    client.post("/cart/items", json={"type": "fabric", "product_id": cotton, "meters": 3}, headers=headers)
    client.post(
        "/cart/items",
        json={
            "type": "fabric", "product_id": cotton, "meters": 2,
            "stitching": {"style": "Jubbah", "measurements": measurements, "notes": "Loose fit"},
        },
        headers=headers,
    )


def place_order(client, headers, **payload):
    body = {"shipping_address": shipping_address()}
    body.update(payload)
    return client.post("/orders", json=body, headers=headers)


class TestCheckout:
    def test_order_copies_cart_and_empties_it(self, test_client: TestClient, catalog, guest_headers, measurements, db_session):
        # Arrange
        fill_scenario_cart(test_client, guest_headers, catalog, measurements)

        # Act
        response = place_order(test_client, guest_headers)

        # Assert
        assert response.status_code == 201
        created = response.json()
        assert created["order_number"].startswith("FB")
        assert created["order_number"].endswith("00001")

        order = db_session.query(Order).filter(Order.id == created["order_id"]).first()
        assert order.subtotal == 110.00
        assert order.tax == 5.50
        assert order.shipping_cost == 0
        assert order.total_amount == 115.50
        assert order.status == "pending"
        assert order.payment_status == "pending"
        assert order.payment_method == "cod"
        assert order.user_id is None
        assert len(order.items) == 2

        cart = test_client.get("/cart", headers=guest_headers).json()
        assert cart["items"] == []

    def test_order_detail_for_same_guest_session(self, test_client: TestClient, catalog, guest_headers, measurements):
        fill_scenario_cart(test_client, guest_headers, catalog, measurements)
        order_id = place_order(test_client, guest_headers).json()["order_id"]

        response = test_client.get(f"/orders/{order_id}", headers=guest_headers)

        assert response.status_code == 200
        data = response.json()
        plain, stitched = data["items"]
        assert plain["item_type"] == "fabric"
        assert plain["meters"] == 3
        assert plain["total_price"] == 45.00
        assert plain["stitching_details"] is None
        assert stitched["total_price"] == 65.00
        assert stitched["stitching_details"]["style"] == "Jubbah"
        assert stitched["stitching_details"]["status"] == "pending"
        assert stitched["stitching_details"]["special_instructions"] == "Loose fit"
        assert stitched["stitching_details"]["measurements"]["neck"] == 15.5
        assert data["shipping_address"]["city"] == "Hyderabad"
        assert data["shipping_address"]["state"] == "Hyderabad"
        assert data["shipping_address"]["address_line1"] == "12 Market Road"

    def test_other_session_cannot_see_order(self, test_client: TestClient, catalog, guest_headers, measurements):
        fill_scenario_cart(test_client, guest_headers, catalog, measurements)
        order_id = place_order(test_client, guest_headers).json()["order_id"]

        response = test_client.get(f"/orders/{order_id}", headers={"X-Cart-Session": "someone-else"})

        assert response.status_code == 404

    def test_admin_can_see_any_order(self, test_client: TestClient, catalog, guest_headers, admin_headers, measurements):
        fill_scenario_cart(test_client, guest_headers, catalog, measurements)
        order_id = place_order(test_client, guest_headers).json()["order_id"]

        response = test_client.get(f"/orders/{order_id}", headers=admin_headers)

        assert response.status_code == 200

    def test_order_numbers_increase(self, test_client: TestClient, catalog, guest_headers):
        attar = catalog["Royal Oudh Attar"]
        numbers = []
        for _ in range(2):
            test_client.post("/cart/items", json={"type": "accessory", "product_id": attar}, headers=guest_headers)
            numbers.append(place_order(test_client, guest_headers).json()["order_number"])

        assert numbers[0].endswith("00001")
        assert numbers[1].endswith("00002")

    def test_empty_cart_cannot_be_ordered(self, test_client: TestClient, guest_headers, db_session):
        response = place_order(test_client, guest_headers)

        assert response.status_code == 400
        assert db_session.query(Order).count() == 0

    def test_logged_in_order_is_linked_to_user(self, test_client: TestClient, catalog, customer, customer_headers):
        test_client.post(
            "/cart/items",
            json={"type": "readymade", "product_id": catalog["Classic White Thobe"], "size": "L", "quantity": 2},
            headers=customer_headers,
        )

        response = place_order(test_client, customer_headers, payment_method="upi")
        order = test_client.get(f"/orders/{response.json()['order_id']}", headers=customer_headers).json()

        assert order["user_id"] == customer.id
        assert order["payment_method"] == "upi"
        assert order["items"][0]["size"] == "L"
        assert order["items"][0]["price"] == 50
        assert order["total_amount"] == 105.00

    def test_order_creation_is_logged(self, test_client: TestClient, catalog, guest_headers, db_session):
        test_client.post(
            "/cart/items", json={"type": "accessory", "product_id": catalog["Royal Oudh Attar"]}, headers=guest_headers,
        )

        place_order(test_client, guest_headers)

        log = db_session.query(Log).filter(Log.action == "ORDER_CREATE").first()
        assert log is not None
        assert log.owner_key == "guest-guest-session-1"

    @pytest.mark.parametrize("field,value", [
        ("full_name", "A"),
        ("email", "not-an-email"),
        ("phone", "12345"),
        ("phone", "call-me-maybe!"),
        ("address", "x"),
        ("postal_code", "1"),
    ])
    def test_invalid_shipping_address_is_rejected(self, test_client: TestClient, catalog, guest_headers, field, value):
        test_client.post(
            "/cart/items", json={"type": "accessory", "product_id": catalog["Royal Oudh Attar"]}, headers=guest_headers,
        )

        response = test_client.post(
            "/orders", json={"shipping_address": shipping_address(**{field: value})}, headers=guest_headers,
        )

        assert response.status_code == 422
        assert len(test_client.get("/cart", headers=guest_headers).json()["items"]) == 1

    def test_unknown_payment_method_is_rejected(self, test_client: TestClient, catalog, guest_headers):
        test_client.post(
            "/cart/items", json={"type": "accessory", "product_id": catalog["Royal Oudh Attar"]}, headers=guest_headers,
        )

        response = place_order(test_client, guest_headers, payment_method="bitcoin")

        assert response.status_code == 422


class TestOrderHistory:
    def test_lists_only_own_orders(self, test_client: TestClient, catalog, customer_headers, guest_headers):
        attar = catalog["Royal Oudh Attar"]
        for headers in (customer_headers, guest_headers):
            test_client.post("/cart/items", json={"type": "accessory", "product_id": attar}, headers=headers)
            place_order(test_client, headers)

        response = test_client.get("/orders", headers=customer_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert len(data["items"]) == 1
        assert data["page"] == 1

    def test_requires_login(self, test_client: TestClient, guest_headers):
        response = test_client.get("/orders", headers=guest_headers)

        assert response.status_code in (401, 403)
