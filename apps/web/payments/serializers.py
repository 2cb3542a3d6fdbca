"""Pydantic schemas for payment API requests."""

from decimal import Decimal

from pydantic import Field

from apps.web.orders.serializers import CamelRequest, CreateOrderRequest


class CreatePaymentRequest(CamelRequest):
    """Request body for POST /api/payment/create-order."""

    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class VerifyPaymentRequest(CreateOrderRequest):
    """
    Request body for POST /api/payment/verify-payment.

    The order being paid for plus the PaymentIntent that paid it.
    """

    payment_intent_id: str = Field(..., min_length=1, max_length=255)
