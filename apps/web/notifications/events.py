"""
Event publishing - fan-out of domain events to websocket groups.

Groups:
- "<order id>": customer tracking room for one order
- "restaurant_<id>": restaurant dashboard
- "broadcast": every connected socket

Delivery is fire-and-forget and at-most-once. Publishing is registered with
transaction.on_commit so subscribers never see uncommitted state, and a
failed publish is logged without failing the request.
"""

import logging

from django.db import transaction

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from .schemas import (
    EventPayload,
    NewOrderEvent,
    OrderStatusChangedEvent,
    OrderStatusUpdatedEvent,
    RestaurantRatingEvent,
    RestaurantStatusEvent,
    SystemStatsEvent,
)

logger = logging.getLogger(__name__)

BROADCAST_GROUP = "broadcast"


def order_room(order_id: int) -> str:
    return str(order_id)


def restaurant_room(restaurant_id: int) -> str:
    return f"restaurant_{restaurant_id}"


def publish(group: str, event: str, payload: EventPayload) -> None:
    """Send one event to a group now. Errors are logged, never raised."""
    layer = get_channel_layer()
    if layer is None:
        logger.warning("No channel layer configured, dropping %s for %s", event, group)
        return

    try:
        async_to_sync(layer.group_send)(
            group,
            {"type": "notify", "event": event, "data": payload.to_wire()},
        )
    except Exception:
        logger.exception("Failed to publish %s to %s", event, group)
        return

    logger.debug("Published %s to %s", event, group)


def publish_on_commit(group: str, event: str, payload: EventPayload) -> None:
    """Publish once the surrounding transaction commits."""
    transaction.on_commit(lambda: publish(group, event, payload))


# =============================================================================
# Domain emitters
# =============================================================================


def order_created(payload: NewOrderEvent) -> None:
    """New order: restaurant dashboard plus platform stats."""
    publish_on_commit(restaurant_room(payload.restaurant_id), "new_order", payload)
    publish_on_commit(
        BROADCAST_GROUP,
        "system_stats_update",
        SystemStatsEvent(
            type="new_order",
            order_id=payload.order_id,
            restaurant_id=payload.restaurant_id,
            total_amount=payload.total_amount,
        ),
    )


def order_status_updated(
    customer_event: OrderStatusUpdatedEvent,
    restaurant_event: OrderStatusChangedEvent,
    delivered: bool = False,
) -> None:
    """Status change: the order's room, its restaurant, and stats on delivery."""
    publish_on_commit(
        order_room(customer_event.order_id), "order_status_updated", customer_event
    )
    publish_on_commit(
        restaurant_room(restaurant_event.restaurant_id),
        "order_status_changed",
        restaurant_event,
    )
    if delivered:
        publish_on_commit(
            BROADCAST_GROUP,
            "system_stats_update",
            SystemStatsEvent(
                type="order_delivered",
                order_id=restaurant_event.order_id,
                restaurant_id=restaurant_event.restaurant_id,
                total_amount=restaurant_event.total_amount,
            ),
        )


def restaurant_status_updated(payload: RestaurantStatusEvent) -> None:
    publish_on_commit(BROADCAST_GROUP, "restaurant_status_updated", payload)


def restaurant_rating_updated(payload: RestaurantRatingEvent) -> None:
    publish_on_commit(BROADCAST_GROUP, "restaurant_rating_updated", payload)
