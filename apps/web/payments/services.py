"""
Payment services - Stripe integration.

Creates PaymentIntents for checkout and verifies that a succeeded intent
actually paid for the order being placed.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from django.conf import settings

import stripe

logger = logging.getLogger(__name__)

# Configure Stripe API key
stripe.api_key = settings.STRIPE_SECRET_KEY


class PaymentError(Exception):
    """Error during payment processing."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


def create_payment_intent(
    amount: Decimal,
    currency: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> stripe.PaymentIntent:
    """
    Create a Stripe PaymentIntent.

    Args:
        amount: Amount in major units (converted to minor units, e.g. paise)
        currency: Currency code (default: settings.STRIPE_CURRENCY)
        metadata: Additional metadata to attach to the payment (e.g., user_id)

    Returns:
        stripe.PaymentIntent with client_secret for the frontend

    Raises:
        PaymentError: If Stripe API call fails
    """
    amount_minor = to_minor_units(amount)

    try:
        intent = stripe.PaymentIntent.create(
            amount=amount_minor,
            currency=currency or settings.STRIPE_CURRENCY,
            automatic_payment_methods={"enabled": True},
            metadata=metadata or {},
        )
    except stripe.StripeError as e:
        logger.warning("Stripe PaymentIntent creation failed: %s", e)
        raise PaymentError(
            message=str(e.user_message or e),
            code=getattr(e, "code", None),
        ) from e

    logger.info("Created PaymentIntent %s for %s", intent.id, amount_minor)
    return intent


def retrieve_payment_intent(payment_intent_id: str) -> stripe.PaymentIntent:
    """
    Retrieve a PaymentIntent from Stripe.

    Raises:
        PaymentError: If PaymentIntent not found or API call fails
    """
    try:
        return stripe.PaymentIntent.retrieve(payment_intent_id)
    except stripe.StripeError as e:
        raise PaymentError(
            message=str(e.user_message or e),
            code=getattr(e, "code", None),
        ) from e


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount (e.g. rupees) to Stripe's minor units."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def verify_payment_intent(
    payment_intent_id: str,
    amount: Decimal,
    user_id: int,
) -> bool:
    """
    Verify that a PaymentIntent paid for this order.

    The intent must have succeeded, charged exactly `amount` in the
    configured currency, and have been created for `user_id`.

    Returns:
        True if every check passes, False otherwise
    """
    try:
        intent = retrieve_payment_intent(payment_intent_id)
    except PaymentError as e:
        logger.warning("Could not verify PaymentIntent %s: %s", payment_intent_id, e)
        return False

    if intent.status != "succeeded":
        reason = f"status is {intent.status}"
    elif intent.amount != to_minor_units(amount):
        reason = f"amount {intent.amount} != {to_minor_units(amount)}"
    elif str(intent.currency).lower() != settings.STRIPE_CURRENCY.lower():
        reason = f"currency is {intent.currency}"
    elif (intent.metadata or {}).get("user_id") != str(user_id):
        reason = "created for another user"
    else:
        return True

    logger.warning("PaymentIntent %s rejected: %s", payment_intent_id, reason)
    return False
