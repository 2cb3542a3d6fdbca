"""Payments module - Stripe integration for online ordering."""

from apps.web.payments.services import (
    PaymentError,
    create_payment_intent,
    retrieve_payment_intent,
    to_minor_units,
    verify_payment_intent,
)

__all__ = [
    "PaymentError",
    "create_payment_intent",
    "retrieve_payment_intent",
    "to_minor_units",
    "verify_payment_intent",
]
