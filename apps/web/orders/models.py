"""
Order models - Customer orders and their line-item snapshots.

Order follows the multi-tenancy pattern with RestaurantScopedModel.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.web.core.models import RestaurantScopedModel


class OrderStatus(models.TextChoices):
    """Order lifecycle status. Values are the exact strings sent to clients."""

    PENDING = "Pending", "Pending"
    CONFIRMED = "Confirmed", "Confirmed"
    PREPARING = "Preparing", "Preparing"
    OUT_FOR_DELIVERY = "Out for Delivery", "Out for Delivery"
    DELIVERED = "Delivered", "Delivered"
    CANCELLED = "Cancelled", "Cancelled"


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Cash on Delivery"
    STRIPE = "stripe", "Card (Stripe)"


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"


class Order(RestaurantScopedModel):
    """
    A customer order placed with one restaurant.

    Orders are never deleted through the API.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )

    total_amount = models.DecimalField(max_digits=10, decimal_places=2)

    # Delivery address snapshot
    delivery_street = models.CharField(max_length=255)
    delivery_city = models.CharField(max_length=100)
    delivery_pincode = models.CharField(max_length=20)

    # Payment
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_id = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        help_text="Stripe PaymentIntent ID; one order per payment",
    )
    payment_reference = models.CharField(max_length=255, blank=True)

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )

    # Transition timestamps
    confirmed_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["restaurant", "status"], name="order_rest_status_idx"),
            models.Index(fields=["user", "-created_at"], name="order_user_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.status})"

    def set_status(self, new_status: str) -> None:
        """Set the status and stamp the matching transition timestamp."""
        self.status = new_status
        now = timezone.now()
        if new_status == OrderStatus.CONFIRMED:
            self.confirmed_at = now
        elif new_status == OrderStatus.DELIVERED:
            self.delivered_at = now
        elif new_status == OrderStatus.CANCELLED:
            self.cancelled_at = now


class OrderItem(models.Model):
    """
    Line item snapshot.

    Name and price are copied at order time so history survives menu edits.
    """

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    menu_item = models.ForeignKey(
        "restaurant.MenuItem",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )

    name = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)
    line_total = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.quantity}x {self.name}"
