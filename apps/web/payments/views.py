"""
Payment API views - Stripe checkout for the online-payment order flow.

1. POST /api/payment/create-order -> PaymentIntent client secret
2. Client confirms the payment with Stripe.js
3. POST /api/payment/verify-payment -> Pending order (idempotent per intent)
"""

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from apps.web.core.decorators import role_required
from apps.web.core.exceptions import ValidationFailed
from apps.web.core.http import json_response, parse_body
from apps.web.core.models import User
from apps.web.orders.models import Order
from apps.web.orders.serializers import serialize_order
from apps.web.orders.services import create_paid_order
from apps.web.payments.serializers import CreatePaymentRequest, VerifyPaymentRequest
from apps.web.payments.services import PaymentError, create_payment_intent

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
@role_required(User.Role.CUSTOMER)
def create_payment_order(request: HttpRequest) -> JsonResponse:
    """
    POST /api/payment/create-order

    Body: {"amount": 450.00}
    """
    data = parse_body(request, CreatePaymentRequest)
    try:
        intent = create_payment_intent(
            data.amount, metadata={"user_id": str(request.user.pk)}
        )
    except PaymentError as e:
        logger.warning("Checkout failed for user %s: %s", request.user.pk, e.message)
        raise ValidationFailed(f"Payment error: {e.message}") from e

    return json_response(
        {
            "id": intent.id,
            "client_secret": intent.client_secret,
            "amount": intent.amount,
            "currency": intent.currency,
        }
    )


@csrf_exempt
@require_POST
@role_required(User.Role.CUSTOMER)
def verify_payment(request: HttpRequest) -> JsonResponse:
    """
    POST /api/payment/verify-payment

    Creates the order once Stripe reports the intent as succeeded for the
    priced total and this customer. A replay by the same customer returns
    the existing order with 200; another customer gets 409.
    """
    data = parse_body(request, VerifyPaymentRequest)

    order, created = create_paid_order(
        request.user,  # type: ignore[arg-type]
        restaurant_id=data.restaurant_id,
        items=data.items,
        delivery_address=data.delivery_address,
        payment_id=data.payment_intent_id,
    )
    order = (
        Order.objects.select_related("user", "restaurant")
        .prefetch_related("items")
        .get(pk=order.pk)
    )

    message = (
        "Payment verified and order placed successfully"
        if created
        else "Order already processed for this payment"
    )
    return json_response(
        {"message": message, "order": serialize_order(order).model_dump(mode="json")},
        201 if created else 200,
    )
