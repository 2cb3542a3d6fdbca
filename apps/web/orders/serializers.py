"""
Pydantic schemas for order API requests and responses.

Request bodies accept camelCase keys (restaurantId, deliveryAddress) as sent
by the web client, as well as snake_case.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from apps.web.orders.models import Order


class CamelRequest(BaseModel):
    """Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Requests
# =============================================================================


class OrderItemRequest(CamelRequest):
    """A line in an order request. Priced server-side from the live menu."""

    menu_item_id: int
    quantity: int = Field(..., ge=1, le=100)


class DeliveryAddressSchema(CamelRequest):
    """Delivery address snapshot."""

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field(..., min_length=1, max_length=20)


class CreateOrderRequest(CamelRequest):
    """Request body for POST /api/orders."""

    restaurant_id: int
    items: list[OrderItemRequest] = Field(..., min_length=1)
    delivery_address: DeliveryAddressSchema


class UpdateOrderStatusRequest(BaseModel):
    """Request body for PUT /api/admin/orders/{id}/status."""

    status: str


# =============================================================================
# Responses
# =============================================================================


class OrderItemSchema(BaseModel):
    """A line item snapshot."""

    model_config = ConfigDict(from_attributes=True)

    menu_item_id: int | None
    name: str
    price: Decimal
    quantity: int
    line_total: Decimal


class OrderSchema(BaseModel):
    """Order detail."""

    id: int
    status: str
    restaurant_id: int
    restaurant_name: str
    customer_id: int
    customer_name: str
    items: list[OrderItemSchema]
    total_amount: Decimal
    delivery_address: DeliveryAddressSchema
    payment_method: str
    payment_status: str
    payment_id: str | None
    confirmed_at: datetime | None
    delivered_at: datetime | None
    cancelled_at: datetime | None
    created_at: datetime
    updated_at: datetime


def serialize_order(order: "Order") -> OrderSchema:
    """Serialize an Order with its items, restaurant and customer."""
    return OrderSchema(
        id=order.pk,
        status=order.status,
        restaurant_id=order.restaurant_id,
        restaurant_name=order.restaurant.name,
        customer_id=order.user_id,
        customer_name=order.user.name or order.user.username,
        items=[OrderItemSchema.model_validate(item) for item in order.items.all()],
        total_amount=order.total_amount,
        delivery_address=DeliveryAddressSchema(
            street=order.delivery_street,
            city=order.delivery_city,
            pincode=order.delivery_pincode,
        ),
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        payment_id=order.payment_id,
        confirmed_at=order.confirmed_at,
        delivered_at=order.delivered_at,
        cancelled_at=order.cancelled_at,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
