"""
Order services - creation and the status lifecycle.

Handles:
1. Pricing requested items from the live menu and snapshotting them
2. Cash orders and paid (Stripe) orders, the latter idempotent on payment_id
3. Status transitions with timestamp stamping
4. Post-commit fan-out of order events
"""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction

from apps.web.core.exceptions import (
    Conflict,
    Forbidden,
    InvalidState,
    NotFound,
    ValidationFailed,
)
from apps.web.notifications import events
from apps.web.notifications.schemas import (
    NewOrderEvent,
    OrderStatusChangedEvent,
    OrderStatusUpdatedEvent,
)
from apps.web.orders.models import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from apps.web.orders.serializers import (
    DeliveryAddressSchema,
    OrderItemRequest,
    serialize_order,
)
from apps.web.payments.services import verify_payment_intent
from apps.web.restaurant.models import MenuItem, Restaurant

if TYPE_CHECKING:
    from apps.web.core.models import User


logger = logging.getLogger(__name__)


def _get_orderable_restaurant(restaurant_id: int) -> Restaurant:
    try:
        restaurant = Restaurant.objects.get(pk=restaurant_id)
    except Restaurant.DoesNotExist as exc:
        raise NotFound("Restaurant not found") from exc
    if not restaurant.is_approved:
        raise InvalidState("Restaurant is not accepting orders")
    return restaurant


def _price_items(
    restaurant: Restaurant, items: list[OrderItemRequest]
) -> tuple[list[OrderItem], Decimal]:
    """
    Build unsaved OrderItem snapshots priced from the restaurant's menu.

    Raises:
        ValidationFailed: If an item is not on this restaurant's menu or is
            sold out.
    """
    if not items:
        raise ValidationFailed("No order items")

    menu = {
        item.pk: item
        for item in MenuItem.objects.filter(
            restaurant=restaurant, pk__in=[i.menu_item_id for i in items]
        )
    }

    lines: list[OrderItem] = []
    total = Decimal("0.00")
    for requested in items:
        menu_item = menu.get(requested.menu_item_id)
        if menu_item is None:
            raise ValidationFailed(
                f"Menu item with ID {requested.menu_item_id} not found."
            )
        if not menu_item.is_available:
            raise ValidationFailed(f"{menu_item.name} is currently unavailable.")

        line_total = menu_item.price * requested.quantity
        total += line_total
        lines.append(
            OrderItem(
                menu_item=menu_item,
                name=menu_item.name,
                price=menu_item.price,
                quantity=requested.quantity,
                line_total=line_total,
            )
        )

    return lines, total.quantize(Decimal("0.01"))


def _create_order(
    user: "User",
    restaurant: Restaurant,
    lines: list[OrderItem],
    total: Decimal,
    delivery_address: DeliveryAddressSchema,
    **payment: str,
) -> Order:
    order = Order.objects.create(
        user=user,
        restaurant=restaurant,
        total_amount=total,
        delivery_street=delivery_address.street,
        delivery_city=delivery_address.city,
        delivery_pincode=delivery_address.pincode,
        **payment,
    )
    for line in lines:
        line.order = order
    OrderItem.objects.bulk_create(lines)

    events.order_created(
        NewOrderEvent(
            order_id=order.pk,
            restaurant_id=restaurant.pk,
            restaurant_name=restaurant.name,
            customer_name=user.name or user.username,
            total_amount=order.total_amount,
            items_count=len(lines),
            status=order.status,
            payment_status=order.payment_status,
        )
    )
    return order


@transaction.atomic
def create_cash_order(
    user: "User",
    restaurant_id: int,
    items: list[OrderItemRequest],
    delivery_address: DeliveryAddressSchema,
) -> Order:
    """
    Create a Pending cash-on-delivery order.

    Raises:
        NotFound: Restaurant does not exist.
        InvalidState: Restaurant is not approved or is closed.
        ValidationFailed: Empty or unknown items.
    """
    restaurant = _get_orderable_restaurant(restaurant_id)
    if not restaurant.is_open:
        raise InvalidState("Restaurant is currently closed")

    lines, total = _price_items(restaurant, items)
    order = _create_order(
        user,
        restaurant,
        lines,
        total,
        delivery_address,
        payment_method=PaymentMethod.CASH,
        payment_status=PaymentStatus.PENDING,
    )
    logger.info(
        "Order %s created for restaurant %s by user %s (cash, %s)",
        order.pk,
        restaurant.pk,
        user.pk,
        total,
    )
    return order


def _replayed_order(order: Order, user: "User") -> Order:
    """Return an existing order for a replayed payment if it is the caller's."""
    if order.user_id != user.pk:
        logger.warning(
            "User %s replayed payment %s owned by user %s",
            user.pk,
            order.payment_id,
            order.user_id,
        )
        raise Conflict("Payment has already been used for another order")
    logger.info("Order %s already exists for payment %s", order.pk, order.payment_id)
    return order


def create_paid_order(
    user: "User",
    restaurant_id: int,
    items: list[OrderItemRequest],
    delivery_address: DeliveryAddressSchema,
    payment_id: str,
) -> tuple[Order, bool]:
    """
    Create a Pending order for a verified online payment.

    The PaymentIntent must have succeeded for exactly the priced total and
    have been created for `user`. Idempotent on payment_id: the same user
    replaying it gets the existing order back.

    Returns:
        (order, created)

    Raises:
        Conflict: payment_id already belongs to another user's order.
        ValidationFailed: Payment does not match the order, or bad items.
    """
    existing = Order.objects.filter(payment_id=payment_id).first()
    if existing is not None:
        return _replayed_order(existing, user), False

    restaurant = _get_orderable_restaurant(restaurant_id)
    lines, total = _price_items(restaurant, items)

    if not verify_payment_intent(payment_id, total, user.pk):
        raise ValidationFailed("Payment verification failed.")

    try:
        with transaction.atomic():
            order = _create_order(
                user,
                restaurant,
                lines,
                total,
                delivery_address,
                payment_method=PaymentMethod.STRIPE,
                payment_status=PaymentStatus.PAID,
                payment_id=payment_id,
            )
    except IntegrityError:
        # Concurrent verification of the same payment won the insert
        return _replayed_order(Order.objects.get(payment_id=payment_id), user), False

    logger.info(
        "Order %s created for restaurant %s by user %s (payment %s)",
        order.pk,
        restaurant.pk,
        user.pk,
        payment_id,
    )
    return order, True


def update_order_status(order_id: int, new_status: str, restaurant: Restaurant) -> Order:
    """
    Move an order to `new_status` on behalf of `restaurant`'s admin.

    Any enumerated status may be set from any status. Subscribers are
    notified after the transaction commits.

    Raises:
        NotFound: Order does not exist.
        Forbidden: Order belongs to another restaurant.
        ValidationFailed: new_status is not a known status.
    """
    with transaction.atomic():
        try:
            order = (
                Order.objects.select_for_update()
                .select_related("user", "restaurant")
                .get(pk=order_id)
            )
        except Order.DoesNotExist as exc:
            raise NotFound("Order not found") from exc

        if order.restaurant_id != restaurant.pk:
            raise Forbidden("Not authorized to update this order")

        if new_status not in OrderStatus.values:
            raise ValidationFailed(
                "Invalid status",
                details=[
                    {
                        "field": "status",
                        "message": f"Must be one of: {', '.join(OrderStatus.values)}",
                    }
                ],
            )

        old_status = order.status
        order.set_status(new_status)
        order.save()

        customer_name = order.user.name or order.user.username
        events.order_status_updated(
            OrderStatusUpdatedEvent(
                order_id=order.pk,
                old_status=old_status,
                new_status=new_status,
                order=serialize_order(order).model_dump(mode="json"),
                customer_name=customer_name,
                restaurant_name=order.restaurant.name,
            ),
            OrderStatusChangedEvent(
                order_id=order.pk,
                restaurant_id=order.restaurant_id,
                old_status=old_status,
                new_status=new_status,
                customer_name=customer_name,
                total_amount=order.total_amount,
            ),
            delivered=new_status == OrderStatus.DELIVERED,
        )

    logger.info(
        "Order %s status changed %s -> %s by restaurant %s",
        order.pk,
        old_status,
        new_status,
        restaurant.pk,
    )
    return order
