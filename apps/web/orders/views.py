"""
Order API views.

Customer endpoints:
- POST /api/orders (cash on delivery, requires Idempotency-Key)
- GET /api/orders/history
- GET /api/orders/{id}

Restaurant admin endpoints:
- GET /api/admin/orders
- PUT /api/admin/orders/{id}/status
"""

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.web.core.decorators import (
    idempotency_key_required,
    restaurant_admin_required,
    role_required,
)
from apps.web.core.exceptions import NotFound
from apps.web.core.http import json_response, parse_body
from apps.web.core.models import User
from apps.web.orders.models import Order
from apps.web.orders.serializers import (
    CreateOrderRequest,
    UpdateOrderStatusRequest,
    serialize_order,
)
from apps.web.orders.services import create_cash_order, update_order_status

logger = logging.getLogger(__name__)


def _with_related(queryset):
    return queryset.select_related("user", "restaurant").prefetch_related("items")


# =============================================================================
# Customer
# =============================================================================


@csrf_exempt
@require_POST
@role_required(User.Role.CUSTOMER)
@idempotency_key_required
def create_order(request: HttpRequest) -> JsonResponse:
    """
    POST /api/orders

    Create a Pending cash-on-delivery order. Prices come from the live menu.
    """
    data = parse_body(request, CreateOrderRequest)
    order = create_cash_order(
        request.user,  # type: ignore[arg-type]
        restaurant_id=data.restaurant_id,
        items=data.items,
        delivery_address=data.delivery_address,
    )
    order = _with_related(Order.objects).get(pk=order.pk)
    return json_response(serialize_order(order).model_dump(mode="json"), 201)


@require_GET
@role_required(User.Role.CUSTOMER)
def order_history(request: HttpRequest) -> JsonResponse:
    """
    GET /api/orders/history

    The customer's own orders, newest first.
    """
    orders = _with_related(Order.objects.filter(user=request.user))
    return json_response([serialize_order(o).model_dump(mode="json") for o in orders])


@require_GET
@role_required(User.Role.CUSTOMER)
def order_detail(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    GET /api/orders/{order_id}

    Another customer's order is reported as not found.
    """
    try:
        order = _with_related(Order.objects.filter(user=request.user)).get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise NotFound("Order not found") from exc
    return json_response(serialize_order(order).model_dump(mode="json"))


# =============================================================================
# Restaurant admin
# =============================================================================


@require_GET
@restaurant_admin_required
def admin_order_list(request: HttpRequest) -> JsonResponse:
    """
    GET /api/admin/orders

    Orders for the admin's restaurant, newest first. Optional ?status= filter.
    """
    orders = _with_related(Order.objects.for_restaurant(request))
    status = request.GET.get("status")
    if status:
        orders = orders.filter(status=status)
    return json_response([serialize_order(o).model_dump(mode="json") for o in orders])


@csrf_exempt
@require_http_methods(["PUT"])
@restaurant_admin_required
def admin_update_order_status(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    PUT /api/admin/orders/{order_id}/status

    Body: {"status": "Confirmed"}
    """
    data = parse_body(request, UpdateOrderStatusRequest)
    order = update_order_status(
        order_id,
        data.status,
        request.restaurant,  # type: ignore[attr-defined]
    )
    order = _with_related(Order.objects).get(pk=order.pk)
    return json_response(
        {
            "message": "Order status updated successfully",
            "order": serialize_order(order).model_dump(mode="json"),
        }
    )
