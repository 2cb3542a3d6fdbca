"""
Restaurant API views - Public listings and admin menu management.

Public endpoints:
- Listing/search of approved restaurants
- Restaurant detail with menu

Restaurant admin endpoints (approved restaurants only):
- Own restaurant, menu item create/update/delete
- Open/closed state and hours
"""

import logging

from django.db.models import Q
from django.http import HttpRequest, JsonResponse
from django.views.decorators.cache import cache_control
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.web.core.decorators import restaurant_admin_required
from apps.web.core.exceptions import NotFound, ValidationFailed
from apps.web.core.http import json_response, parse_body
from apps.web.restaurant.models import MenuItem, Restaurant, RestaurantStatus
from apps.web.restaurant.serializers import (
    MenuItemCreateRequest,
    MenuItemSchema,
    MenuItemUpdateRequest,
    OpenStatusRequest,
    OpenStatusResponse,
    serialize_restaurant,
    serialize_restaurant_detail,
)

logger = logging.getLogger(__name__)


@require_GET
@cache_control(max_age=60, public=True)  # 1 minute
def restaurant_list(request: HttpRequest) -> JsonResponse:
    """
    GET /api/restaurants

    Returns approved restaurants. Optional filters:
    - q: matches name, city, cuisine, or menu item name/category
    - cuisine: matches cuisine list
    - minRating: minimum average rating
    """
    restaurants = Restaurant.objects.filter(status=RestaurantStatus.APPROVED)

    q = request.GET.get("q", "").strip()
    if q:
        restaurants = restaurants.filter(
            Q(name__icontains=q)
            | Q(city__icontains=q)
            | Q(cuisine__icontains=q)
            | Q(menuitems__name__icontains=q)
            | Q(menuitems__category__icontains=q)
        ).distinct()

    cuisine = request.GET.get("cuisine", "").strip()
    if cuisine:
        restaurants = restaurants.filter(cuisine__icontains=cuisine)

    min_rating = request.GET.get("minRating")
    if min_rating:
        try:
            restaurants = restaurants.filter(average_rating__gte=float(min_rating))
        except ValueError as exc:
            raise ValidationFailed("minRating must be a number") from exc

    return json_response(
        [serialize_restaurant(r).model_dump(mode="json") for r in restaurants]
    )


@require_GET
def restaurant_detail(_request: HttpRequest, restaurant_id: int) -> JsonResponse:
    """
    GET /api/restaurants/{restaurant_id}

    Returns a restaurant with its full menu.
    """
    try:
        restaurant = Restaurant.objects.prefetch_related("menuitems").get(
            pk=restaurant_id
        )
    except Restaurant.DoesNotExist as exc:
        raise NotFound("Restaurant not found.") from exc

    return json_response(serialize_restaurant_detail(restaurant).model_dump(mode="json"))


@require_GET
@restaurant_admin_required
def my_restaurant(request: HttpRequest) -> JsonResponse:
    """
    GET /api/restaurants/my-restaurant

    Returns the logged-in admin's restaurant with its menu.
    """
    restaurant = request.restaurant  # type: ignore[attr-defined]
    return json_response(serialize_restaurant_detail(restaurant).model_dump(mode="json"))


@csrf_exempt
@require_POST
@restaurant_admin_required
def add_menu_item(request: HttpRequest) -> JsonResponse:
    """
    POST /api/restaurants/menu

    Add a menu item to the admin's restaurant.
    """
    data = parse_body(request, MenuItemCreateRequest)
    item = MenuItem.objects.create(
        restaurant=request.restaurant,  # type: ignore[attr-defined]
        **data.model_dump(),
    )
    logger.info("Menu item %s added to restaurant %s", item.pk, item.restaurant_id)
    return json_response(MenuItemSchema.model_validate(item).model_dump(mode="json"), 201)


def _get_own_menu_item(request: HttpRequest, item_id: int) -> MenuItem:
    """Get a menu item belonging to the admin's restaurant or raise NotFound."""
    try:
        return MenuItem.objects.for_restaurant(request).get(pk=item_id)
    except MenuItem.DoesNotExist as exc:
        raise NotFound("Menu item not found.") from exc


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@restaurant_admin_required
def menu_item_detail(request: HttpRequest, item_id: int) -> JsonResponse:
    """
    PUT /api/restaurants/menu/{item_id} - partial update
    DELETE /api/restaurants/menu/{item_id} - remove

    Past orders keep their line-item snapshot when an item is removed.
    """
    item = _get_own_menu_item(request, item_id)

    if request.method == "DELETE":
        item.delete()
        logger.info("Menu item %s removed from restaurant %s", item_id, item.restaurant_id)
        return json_response({"message": "Menu item removed successfully."})

    data = parse_body(request, MenuItemUpdateRequest)
    changes = data.model_dump(exclude_none=True)
    for field, value in changes.items():
        setattr(item, field, value)
    if changes:
        item.save(update_fields=[*changes, "updated_at"])

    return json_response(
        {
            "message": "Menu item updated successfully.",
            "menu_item": MenuItemSchema.model_validate(item).model_dump(mode="json"),
        }
    )


@csrf_exempt
@require_http_methods(["PUT"])
@restaurant_admin_required
def update_open_status(request: HttpRequest) -> JsonResponse:
    """
    PUT /api/admin/restaurant/status

    Open or close the admin's restaurant and optionally set its hours.
    """
    data = parse_body(request, OpenStatusRequest)
    restaurant = request.restaurant  # type: ignore[attr-defined]

    restaurant.is_open = data.is_open
    if data.opening_time is not None:
        restaurant.opening_time = data.opening_time
    if data.closing_time is not None:
        restaurant.closing_time = data.closing_time
    restaurant.save(update_fields=["is_open", "opening_time", "closing_time", "updated_at"])

    logger.info(
        "Restaurant %s is now %s", restaurant.pk, "open" if data.is_open else "closed"
    )
    response = OpenStatusResponse(
        message=f"Restaurant is now {'open' if data.is_open else 'closed'}",
        is_open=restaurant.is_open,
        opening_time=restaurant.opening_time.strftime("%H:%M"),
        closing_time=restaurant.closing_time.strftime("%H:%M"),
    )
    return json_response(response.model_dump(mode="json"))
