"""
Integration tests for payment API views.
"""

from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.test import Client as DjangoClient

import pytest
import stripe

from apps.web.orders.models import Order, PaymentMethod, PaymentStatus
from apps.web.restaurant.tests.factories import MenuItemFactory, UserFactory

RETRIEVE = "apps.web.payments.services.stripe.PaymentIntent.retrieve"


@pytest.fixture
def menu_item():
    return MenuItemFactory(price=Decimal("150.00"))


def _verify_body(menu_item, intent_id: str = "pi_paid_1") -> dict:
    return {
        "paymentIntentId": intent_id,
        "restaurantId": menu_item.restaurant_id,
        "items": [{"menuItemId": menu_item.pk, "quantity": 2}],
        "deliveryAddress": {"street": "1 MG Road", "city": "Pune", "pincode": "411001"},
    }


@pytest.mark.django_db
class TestCreatePaymentOrder:
    """Tests for POST /api/payment/create-order."""

    @patch("apps.web.payments.services.stripe.PaymentIntent.create")
    def test_returns_client_secret(self, mock_create, customer_client: DjangoClient):
        mock_create.return_value = MagicMock(
            id="pi_1", client_secret="pi_1_secret", amount=30000, currency="inr"
        )

        response = customer_client.post(
            "/api/payment/create-order",
            {"amount": "300.00"},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["client_secret"] == "pi_1_secret"
        assert mock_create.call_args[1]["amount"] == 30000

    @patch("apps.web.payments.services.stripe.PaymentIntent.create")
    def test_stripe_error_is_400(self, mock_create, customer_client: DjangoClient):
        mock_create.side_effect = stripe.StripeError("Amount too small")

        response = customer_client.post(
            "/api/payment/create-order",
            {"amount": "1.00"},
            content_type="application/json",
        )

        assert response.status_code == 400
        assert "Amount too small" in response.json()["message"]

    def test_requires_login(self):
        response = DjangoClient().post(
            "/api/payment/create-order",
            {"amount": "300.00"},
            content_type="application/json",
        )

        assert response.status_code == 401


def _intent(user, amount: int = 30000, **overrides) -> MagicMock:
    """A succeeded PaymentIntent created for `user` (300.00 INR by default)."""
    fields = {
        "id": "pi_paid_1",
        "status": "succeeded",
        "amount": amount,
        "currency": "inr",
        "metadata": {"user_id": str(user.pk)},
    }
    fields.update(overrides)
    return MagicMock(**fields)


@pytest.mark.django_db
class TestVerifyPayment:
    """Tests for POST /api/payment/verify-payment."""

    @patch(RETRIEVE)
    def test_creates_paid_pending_order(
        self, mock_retrieve, customer_client: DjangoClient, customer, menu_item
    ):
        mock_retrieve.return_value = _intent(customer)

        response = customer_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )

        assert response.status_code == 201
        order = Order.objects.get(payment_id="pi_paid_1")
        assert order.status == "Pending"
        assert order.user == customer
        assert order.payment_method == PaymentMethod.STRIPE
        assert order.payment_status == PaymentStatus.PAID
        assert order.total_amount == Decimal("300.00")

    @patch(RETRIEVE)
    def test_replay_returns_existing_order(
        self, mock_retrieve, customer_client: DjangoClient, customer, menu_item
    ):
        mock_retrieve.return_value = _intent(customer)

        first = customer_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )
        second = customer_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )

        assert second.status_code == 200
        assert second.json()["order"]["id"] == first.json()["order"]["id"]
        assert Order.objects.filter(payment_id="pi_paid_1").count() == 1

    @patch(RETRIEVE)
    def test_replay_by_another_customer_conflicts(
        self, mock_retrieve, customer_client: DjangoClient, customer, menu_item
    ):
        mock_retrieve.return_value = _intent(customer)
        customer_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )
        other_client = DjangoClient()
        other_client.force_login(UserFactory())

        response = other_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )

        assert response.status_code == 409
        assert "order" not in response.json()
        assert Order.objects.filter(payment_id="pi_paid_1").count() == 1

    @patch(RETRIEVE)
    def test_unsucceeded_intent_creates_nothing(
        self, mock_retrieve, customer_client: DjangoClient, customer, menu_item
    ):
        mock_retrieve.return_value = _intent(
            customer, status="requires_payment_method"
        )

        response = customer_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Payment verification failed."
        assert not Order.objects.exists()

    @patch(RETRIEVE)
    def test_underpaid_intent_creates_nothing(
        self, mock_retrieve, customer_client: DjangoClient, customer, menu_item
    ):
        # 1.00 INR paid for a 300.00 order
        mock_retrieve.return_value = _intent(customer, amount=100)

        response = customer_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert not Order.objects.exists()

    @patch(RETRIEVE)
    def test_wrong_currency_creates_nothing(
        self, mock_retrieve, customer_client: DjangoClient, customer, menu_item
    ):
        mock_retrieve.return_value = _intent(customer, currency="usd")

        response = customer_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert not Order.objects.exists()

    @patch(RETRIEVE)
    def test_intent_of_another_user_creates_nothing(
        self, mock_retrieve, customer_client: DjangoClient, menu_item
    ):
        mock_retrieve.return_value = _intent(UserFactory())

        response = customer_client.post(
            "/api/payment/verify-payment",
            _verify_body(menu_item),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert not Order.objects.exists()

    @patch(RETRIEVE)
    def test_empty_items_rejected(
        self, mock_retrieve, customer_client: DjangoClient, customer, menu_item
    ):
        mock_retrieve.return_value = _intent(customer)
        body = _verify_body(menu_item)
        body["items"] = []

        response = customer_client.post(
            "/api/payment/verify-payment", body, content_type="application/json"
        )

        assert response.status_code == 400
        assert not Order.objects.exists()

    @patch(RETRIEVE)
    def test_unknown_restaurant_404(
        self, mock_retrieve, customer_client: DjangoClient, customer, menu_item
    ):
        mock_retrieve.return_value = _intent(customer)
        body = _verify_body(menu_item)
        body["restaurantId"] = 99999

        response = customer_client.post(
            "/api/payment/verify-payment", body, content_type="application/json"
        )

        assert response.status_code == 404
