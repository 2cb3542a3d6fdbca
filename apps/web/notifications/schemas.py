"""
Pydantic schemas for real-time event payloads.

Payload keys go over the wire in camelCase.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from django.utils import timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EventPayload(BaseModel):
    """Base for all event payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: datetime = Field(default_factory=timezone.now)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class NewOrderEvent(EventPayload):
    """new_order -> restaurant room."""

    order_id: int
    restaurant_id: int
    restaurant_name: str
    customer_name: str
    total_amount: Decimal
    items_count: int
    status: str
    payment_status: str


class SystemStatsEvent(EventPayload):
    """system_stats_update -> broadcast."""

    type: Literal["new_order", "order_delivered"]
    order_id: int
    restaurant_id: int
    total_amount: Decimal


class OrderStatusUpdatedEvent(EventPayload):
    """order_status_updated -> order room."""

    order_id: int
    old_status: str
    new_status: str
    order: dict[str, Any]
    customer_name: str
    restaurant_name: str


class OrderStatusChangedEvent(EventPayload):
    """order_status_changed -> restaurant room."""

    order_id: int
    restaurant_id: int
    old_status: str
    new_status: str
    customer_name: str
    total_amount: Decimal


class RestaurantStatusEvent(EventPayload):
    """restaurant_status_updated -> broadcast."""

    restaurant_id: int
    restaurant_name: str
    old_status: str
    new_status: str


class RestaurantRatingEvent(EventPayload):
    """restaurant_rating_updated -> broadcast."""

    restaurant_id: int
    restaurant_name: str
    old_rating: float
    new_rating: float
    total_reviews: int


class RoomRequest(BaseModel):
    """Client frame data for join_order_room / leave_order_room."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_id: int
