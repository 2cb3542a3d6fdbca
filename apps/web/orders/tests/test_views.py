"""
Integration tests for order API views.
"""

from decimal import Decimal

from django.test import Client as DjangoClient

import pytest

from apps.web.orders.models import Order, OrderStatus
from apps.web.restaurant.tests.factories import AdminFactory, MenuItemFactory

from .factories import OrderFactory, OrderItemFactory


def _order_body(item) -> dict:
    return {
        "restaurantId": item.restaurant_id,
        "items": [{"menuItemId": item.pk, "quantity": 2}],
        "deliveryAddress": {"street": "1 MG Road", "city": "Pune", "pincode": "411001"},
    }


@pytest.mark.django_db
class TestCreateOrderView:
    """Tests for POST /api/orders."""

    def test_creates_pending_order(self, customer_client: DjangoClient, restaurant):
        item = MenuItemFactory(restaurant=restaurant, price=Decimal("120.00"))

        response = customer_client.post(
            "/api/orders",
            _order_body(item),
            content_type="application/json",
            headers={"Idempotency-Key": "order-1"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "Pending"
        assert data["total_amount"] == "240.00"
        assert data["items"][0]["quantity"] == 2

    def test_requires_idempotency_key(self, customer_client: DjangoClient, restaurant):
        item = MenuItemFactory(restaurant=restaurant)

        response = customer_client.post(
            "/api/orders", _order_body(item), content_type="application/json"
        )

        assert response.status_code == 400
        assert not Order.objects.exists()

    def test_same_key_returns_cached_order(
        self, customer_client: DjangoClient, restaurant
    ):
        item = MenuItemFactory(restaurant=restaurant)

        first = customer_client.post(
            "/api/orders",
            _order_body(item),
            content_type="application/json",
            headers={"Idempotency-Key": "order-dup"},
        )
        second = customer_client.post(
            "/api/orders",
            _order_body(item),
            content_type="application/json",
            headers={"Idempotency-Key": "order-dup"},
        )

        assert second.status_code == first.status_code == 201
        assert second.json()["id"] == first.json()["id"]
        assert Order.objects.count() == 1

    def test_admin_cannot_order(self, restaurant_admin_client: DjangoClient, restaurant):
        item = MenuItemFactory(restaurant=restaurant)

        response = restaurant_admin_client.post(
            "/api/orders",
            _order_body(item),
            content_type="application/json",
            headers={"Idempotency-Key": "admin-order"},
        )

        assert response.status_code == 403

    def test_validation_error_details(self, customer_client: DjangoClient):
        response = customer_client.post(
            "/api/orders",
            {"restaurantId": 1, "items": []},
            content_type="application/json",
            headers={"Idempotency-Key": "bad-order"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        fields = {d["field"] for d in body["details"]}
        assert "items" in fields
        assert "deliveryAddress" in fields


@pytest.mark.django_db
class TestCustomerOrderViews:
    """Tests for order history and detail."""

    def test_history_is_own_orders_newest_first(
        self, customer_client: DjangoClient, customer
    ):
        older = OrderFactory(user=customer)
        newer = OrderFactory(user=customer)
        OrderFactory()

        response = customer_client.get("/api/orders/history")

        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [newer.pk, older.pk]

    def test_detail_includes_items(self, customer_client: DjangoClient, customer):
        line = OrderItemFactory(order__user=customer)

        response = customer_client.get(f"/api/orders/{line.order_id}")

        assert response.status_code == 200
        assert response.json()["items"][0]["name"] == line.name

    def test_other_customers_order_is_404(self, customer_client: DjangoClient):
        order = OrderFactory()

        response = customer_client.get(f"/api/orders/{order.pk}")

        assert response.status_code == 404


@pytest.mark.django_db
class TestAdminOrderViews:
    """Tests for /api/admin/orders endpoints."""

    def test_lists_only_own_restaurant(
        self, restaurant_admin_client: DjangoClient, restaurant
    ):
        own = OrderFactory(restaurant=restaurant)
        OrderFactory()

        response = restaurant_admin_client.get("/api/admin/orders")

        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [own.pk]

    def test_confirm_order_notifies_restaurant_room(
        self,
        restaurant_admin_client: DjangoClient,
        restaurant,
        subscribe,
        receive_event,
        django_capture_on_commit_callbacks,
    ):
        order = OrderFactory(restaurant=restaurant, status=OrderStatus.PENDING)
        channel = subscribe(f"restaurant_{restaurant.pk}")

        with django_capture_on_commit_callbacks(execute=True):
            response = restaurant_admin_client.put(
                f"/api/admin/orders/{order.pk}/status",
                {"status": "Confirmed"},
                content_type="application/json",
            )

        assert response.status_code == 200
        assert response.json()["order"]["status"] == "Confirmed"

        message = receive_event(channel)
        assert message["event"] == "order_status_changed"
        assert message["data"]["orderId"] == order.pk
        assert message["data"]["newStatus"] == "Confirmed"

    def test_other_restaurants_order_forbidden(
        self, restaurant_admin_client: DjangoClient
    ):
        order = OrderFactory(status=OrderStatus.PENDING)

        response = restaurant_admin_client.put(
            f"/api/admin/orders/{order.pk}/status",
            {"status": "Confirmed"},
            content_type="application/json",
        )

        assert response.status_code == 403
        order.refresh_from_db()
        assert order.status == OrderStatus.PENDING

    def test_invalid_status_400(self, restaurant_admin_client: DjangoClient, restaurant):
        order = OrderFactory(restaurant=restaurant)

        response = restaurant_admin_client.put(
            f"/api/admin/orders/{order.pk}/status",
            {"status": "Lost"},
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status"

    def test_unapproved_admin_forbidden(self):
        admin = AdminFactory(restaurant__status="pending_approval")
        client = DjangoClient()
        client.force_login(admin)

        response = client.get("/api/admin/orders")

        assert response.status_code == 403

    def test_open_status(self, restaurant_admin_client: DjangoClient, restaurant):
        response = restaurant_admin_client.put(
            "/api/admin/restaurant/status",
            {"is_open": False, "closing_time": "23:30"},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["closing_time"] == "23:30"
        restaurant.refresh_from_db()
        assert restaurant.is_open is False
