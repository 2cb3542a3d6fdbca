"""Tests for payment services."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.test import override_settings

import pytest
import stripe

from apps.web.payments.services import (
    PaymentError,
    create_payment_intent,
    retrieve_payment_intent,
    to_minor_units,
    verify_payment_intent,
)


class TestCreatePaymentIntent:
    """Tests for create_payment_intent."""

    @patch("apps.web.payments.services.stripe.PaymentIntent.create")
    def test_create_payment_intent_success(self, mock_create):
        """Test successful PaymentIntent creation."""
        mock_create.return_value = MagicMock(
            id="pi_test123",
            client_secret="pi_test123_secret_abc",
            amount=45000,
            currency="inr",
            status="requires_payment_method",
        )

        result = create_payment_intent(
            amount=Decimal("450.00"),
            currency="inr",
            metadata={"user_id": "7"},
        )

        mock_create.assert_called_once_with(
            amount=45000,
            currency="inr",
            automatic_payment_methods={"enabled": True},
            metadata={"user_id": "7"},
        )
        assert result.id == "pi_test123"
        assert result.client_secret == "pi_test123_secret_abc"

    @override_settings(STRIPE_CURRENCY="eur")
    @patch("apps.web.payments.services.stripe.PaymentIntent.create")
    def test_currency_defaults_to_setting(self, mock_create):
        mock_create.return_value = MagicMock(id="pi_test123")

        create_payment_intent(amount=Decimal("50.00"))

        call_args = mock_create.call_args
        assert call_args[1]["currency"] == "eur"
        assert call_args[1]["amount"] == 5000

    @patch("apps.web.payments.services.stripe.PaymentIntent.create")
    def test_create_payment_intent_rounds_amount(self, mock_create):
        """Half a minor unit rounds up."""
        mock_create.return_value = MagicMock(id="pi_test123")

        create_payment_intent(amount=Decimal("12.995"))

        call_args = mock_create.call_args
        assert call_args[1]["amount"] == 1300

    @patch("apps.web.payments.services.stripe.PaymentIntent.create")
    def test_create_payment_intent_stripe_error(self, mock_create):
        """Test handling of Stripe API errors."""
        mock_create.side_effect = stripe.StripeError("Card declined")

        with pytest.raises(PaymentError) as exc_info:
            create_payment_intent(amount=Decimal("25.00"))

        assert "Card declined" in str(exc_info.value)


class TestRetrievePaymentIntent:
    """Tests for retrieve_payment_intent."""

    @patch("apps.web.payments.services.stripe.PaymentIntent.retrieve")
    def test_retrieve_payment_intent_success(self, mock_retrieve):
        mock_retrieve.return_value = MagicMock(id="pi_test123", status="succeeded")

        result = retrieve_payment_intent("pi_test123")

        mock_retrieve.assert_called_once_with("pi_test123")
        assert result.status == "succeeded"

    @patch("apps.web.payments.services.stripe.PaymentIntent.retrieve")
    def test_retrieve_payment_intent_not_found(self, mock_retrieve):
        mock_retrieve.side_effect = stripe.StripeError("No such payment_intent")

        with pytest.raises(PaymentError) as exc_info:
            retrieve_payment_intent("pi_invalid")

        assert "payment_intent" in str(exc_info.value)


class TestVerifyPaymentIntent:
    """Tests for verify_payment_intent."""

    def _intent(self, **overrides) -> MagicMock:
        fields = {
            "status": "succeeded",
            "amount": 45000,
            "currency": "inr",
            "metadata": {"user_id": "7"},
        }
        fields.update(overrides)
        return MagicMock(**fields)

    @patch("apps.web.payments.services.retrieve_payment_intent")
    def test_matching_intent_verifies(self, mock_retrieve):
        mock_retrieve.return_value = self._intent()

        assert verify_payment_intent("pi_test123", Decimal("450.00"), 7) is True

    @pytest.mark.parametrize(
        "overrides",
        [
            {"status": "requires_payment_method"},
            {"amount": 100},
            {"currency": "usd"},
            {"metadata": {"user_id": "8"}},
            {"metadata": {}},
        ],
    )
    @patch("apps.web.payments.services.retrieve_payment_intent")
    def test_mismatch_rejected(self, mock_retrieve, overrides, caplog):
        mock_retrieve.return_value = self._intent(**overrides)

        assert verify_payment_intent("pi_test123", Decimal("450.00"), 7) is False
        assert "rejected" in caplog.text

    @patch("apps.web.payments.services.retrieve_payment_intent")
    def test_currency_case_insensitive(self, mock_retrieve):
        mock_retrieve.return_value = self._intent(currency="INR")

        assert verify_payment_intent("pi_test123", Decimal("450.00"), 7) is True

    @patch("apps.web.payments.services.retrieve_payment_intent")
    def test_verify_payment_intent_error_returns_false(self, mock_retrieve):
        """Errors return False instead of raising."""
        mock_retrieve.side_effect = PaymentError("Not found")

        assert verify_payment_intent("pi_invalid", Decimal("450.00"), 7) is False


def test_to_minor_units_rounds_half_up():
    assert to_minor_units(Decimal("12.995")) == 1300
    assert to_minor_units(Decimal("450")) == 45000
