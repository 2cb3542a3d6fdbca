"""
Dashboard views - Platform administration for super admins.

- Restaurant approval workflow
- System statistics
- Platform-wide listings of restaurants, users and orders
"""

import logging
from datetime import timedelta

from django.db import transaction
from django.db.models import Count, Sum
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from apps.web.accounts.views import serialize_user
from apps.web.core.decorators import superadmin_required
from apps.web.core.exceptions import NotFound
from apps.web.core.http import json_response, parse_body
from apps.web.core.models import User
from apps.web.notifications import events
from apps.web.notifications.schemas import RestaurantStatusEvent
from apps.web.orders.models import Order, OrderStatus, PaymentStatus
from apps.web.orders.serializers import serialize_order
from apps.web.restaurant.models import Restaurant, RestaurantStatus
from apps.web.restaurant.serializers import RestaurantStatusRequest, serialize_restaurant

logger = logging.getLogger(__name__)

PENDING_STATUSES = [RestaurantStatus.PENDING, RestaurantStatus.PENDING_APPROVAL]
RECENT_ACTIVITY_DAYS = 7


@require_GET
@superadmin_required
def pending_restaurants(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/admin/restaurants/pending
    """
    restaurants = Restaurant.objects.filter(status__in=PENDING_STATUSES)
    return json_response(
        [serialize_restaurant(r).model_dump(mode="json") for r in restaurants]
    )


@csrf_exempt
@require_http_methods(["PUT"])
@superadmin_required
def update_restaurant_status(request: HttpRequest, restaurant_id: int) -> JsonResponse:
    """
    PUT /api/admin/restaurants/{restaurant_id}/status

    Body: {"status": "approved" | "rejected" | ...}
    """
    data = parse_body(request, RestaurantStatusRequest)

    with transaction.atomic():
        try:
            restaurant = Restaurant.objects.select_for_update().get(pk=restaurant_id)
        except Restaurant.DoesNotExist as exc:
            raise NotFound("Restaurant not found") from exc

        old_status = restaurant.status
        restaurant.status = data.status
        restaurant.save(update_fields=["status", "updated_at"])

        events.restaurant_status_updated(
            RestaurantStatusEvent(
                restaurant_id=restaurant.pk,
                restaurant_name=restaurant.name,
                old_status=old_status,
                new_status=restaurant.status,
            )
        )

    logger.info(
        "Restaurant %s status changed %s -> %s by user %s",
        restaurant.pk,
        old_status,
        restaurant.status,
        request.user.pk,
    )
    return json_response(
        {
            "message": f"Restaurant status updated to {restaurant.status}",
            "restaurant": serialize_restaurant(restaurant).model_dump(mode="json"),
        }
    )


@require_GET
@superadmin_required
def system_stats(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/admin/stats

    Platform counters. Revenue counts paid orders and delivered cash orders.
    Recent activity covers the last 7 days; registrations are new restaurants.
    """
    now = timezone.now()
    today_start = timezone.localtime(now).replace(
        hour=0, minute=0, second=0, microsecond=0
    )
    recent_start = now - timedelta(days=RECENT_ACTIVITY_DAYS)

    restaurant_counts = dict(
        Restaurant.objects.order_by().values_list("status").annotate(n=Count("id"))
    )
    order_counts = dict(
        Order.objects.order_by().values_list("status").annotate(n=Count("id"))
    )
    revenue = (
        Order.objects.filter(payment_status=PaymentStatus.PAID).aggregate(
            total=Sum("total_amount")
        )["total"]
        or 0
    ) + (
        Order.objects.exclude(payment_status=PaymentStatus.PAID)
        .filter(status=OrderStatus.DELIVERED)
        .aggregate(total=Sum("total_amount"))["total"]
        or 0
    )

    return json_response(
        {
            "total_restaurants": sum(restaurant_counts.values()),
            "approved_restaurants": restaurant_counts.get(RestaurantStatus.APPROVED, 0),
            "pending_restaurants": sum(
                restaurant_counts.get(s, 0) for s in PENDING_STATUSES
            ),
            "total_users": User.objects.count(),
            "total_orders": sum(order_counts.values()),
            "today_orders": Order.objects.filter(created_at__gte=today_start).count(),
            "orders_by_status": {
                status: order_counts.get(status, 0) for status in OrderStatus.values
            },
            "total_revenue": str(revenue),
            "recent_activity": {
                "orders": Order.objects.filter(created_at__gte=recent_start).count(),
                "registrations": Restaurant.objects.filter(
                    created_at__gte=recent_start
                ).count(),
            },
        }
    )


@require_GET
@superadmin_required
def all_restaurants(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/admin/restaurants
    """
    return json_response(
        [serialize_restaurant(r).model_dump(mode="json") for r in Restaurant.objects.all()]
    )


@require_GET
@superadmin_required
def all_users(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/admin/users
    """
    users = User.objects.select_related("restaurant").order_by("-date_joined")
    return json_response([serialize_user(u).model_dump(mode="json") for u in users])


@require_GET
@superadmin_required
def all_orders(request: HttpRequest) -> JsonResponse:
    """
    GET /api/admin/orders/all

    Optional filters: ?status=, ?restaurant=<id>
    """
    orders = Order.objects.select_related("user", "restaurant").prefetch_related("items")
    status = request.GET.get("status")
    if status:
        orders = orders.filter(status=status)
    restaurant_id = request.GET.get("restaurant")
    if restaurant_id and restaurant_id.isdigit():
        orders = orders.filter(restaurant_id=int(restaurant_id))
    return json_response([serialize_order(o).model_dump(mode="json") for o in orders])
