"""
Review services - submission and restaurant rating aggregation.

A review insert and the restaurant's accumulator update commit together.
The restaurant row is locked for the update so concurrent reviews of the
same restaurant cannot lose increments.
"""

import logging
from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction
from django.db.models import Count, Sum

from apps.web.core.exceptions import Conflict, Forbidden, InvalidState, NotFound
from apps.web.notifications import events
from apps.web.notifications.schemas import RestaurantRatingEvent
from apps.web.orders.models import Order, OrderStatus
from apps.web.restaurant.models import RATING_SEED_COUNT, RATING_SEED_SUM, Restaurant
from apps.web.reviews.models import Review

if TYPE_CHECKING:
    from apps.web.core.models import User


logger = logging.getLogger(__name__)

RATING_FIELDS = ["total_rating_sum", "total_rating_count", "average_rating", "updated_at"]


def submit_review(order_id: int, user: "User", rating: int, comment: str = "") -> Review:
    """
    Review a delivered order and fold the rating into its restaurant.

    Raises:
        NotFound: Order does not exist.
        Forbidden: Order belongs to another user.
        InvalidState: Order is not Delivered.
        Conflict: The order already has a review.
    """
    try:
        order = Order.objects.get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise NotFound("Order not found") from exc

    if order.user_id != user.pk:
        raise Forbidden("You can only review your own orders")

    if order.status != OrderStatus.DELIVERED:
        raise InvalidState("You can only review delivered orders")

    try:
        with transaction.atomic():
            review = Review.objects.create(
                user=user,
                restaurant_id=order.restaurant_id,
                order=order,
                rating=rating,
                comment=comment,
                is_verified_purchase=True,
            )

            restaurant = Restaurant.objects.select_for_update().get(
                pk=order.restaurant_id
            )
            old_rating = restaurant.average_rating
            restaurant.add_rating(rating)
            restaurant.save(update_fields=RATING_FIELDS)

            events.restaurant_rating_updated(
                RestaurantRatingEvent(
                    restaurant_id=restaurant.pk,
                    restaurant_name=restaurant.name,
                    old_rating=old_rating,
                    new_rating=restaurant.average_rating,
                    total_reviews=restaurant.total_rating_count,
                )
            )
    except IntegrityError as exc:
        raise Conflict("You have already reviewed this order") from exc

    logger.info(
        "Review %s created for order %s; restaurant %s rating %.2f -> %.2f",
        review.pk,
        order.pk,
        restaurant.pk,
        old_rating,
        restaurant.average_rating,
    )
    return review


def can_review(order_id: int, user: "User") -> tuple[bool, str]:
    """Whether `user` may review the order, with a reason when not."""
    order = Order.objects.filter(pk=order_id, user=user).first()
    if order is None:
        return False, "Order not found"
    if order.status != OrderStatus.DELIVERED:
        return False, "Order must be delivered before reviewing"
    if Review.objects.filter(order=order).exists():
        return False, "You have already reviewed this order"
    return True, "Order can be reviewed"


def recompute_restaurant_ratings(restaurant: Restaurant) -> bool:
    """
    Reset a restaurant's accumulators to the seed plus its stored reviews.

    Returns True if any stored value changed.
    """
    with transaction.atomic():
        locked = Restaurant.objects.select_for_update().get(pk=restaurant.pk)
        totals = Review.objects.filter(restaurant=locked).aggregate(
            rating_sum=Sum("rating"), rating_count=Count("id")
        )
        rating_sum = RATING_SEED_SUM + (totals["rating_sum"] or 0)
        rating_count = RATING_SEED_COUNT + totals["rating_count"]
        average = rating_sum / rating_count

        changed = (
            locked.total_rating_sum != rating_sum
            or locked.total_rating_count != rating_count
            or locked.average_rating != average
        )
        if changed:
            logger.warning(
                "Restaurant %s ratings drifted: %s/%s -> %s/%s",
                locked.pk,
                locked.total_rating_sum,
                locked.total_rating_count,
                rating_sum,
                rating_count,
            )
            locked.total_rating_sum = rating_sum
            locked.total_rating_count = rating_count
            locked.average_rating = average
            locked.save(update_fields=RATING_FIELDS)

    return changed
