"""
Review model - One verified review per delivered order.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Review(models.Model):
    """
    A customer's rating of a delivered order.

    The OneToOne on order is the uniqueness guarantee: concurrent duplicate
    submissions are serialized by the database. Reviews are never edited or
    deleted through the API.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reviews",
    )
    restaurant = models.ForeignKey(
        "restaurant.Restaurant",
        on_delete=models.CASCADE,
        related_name="reviews",
    )
    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="review",
    )

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    comment = models.TextField(max_length=500, blank=True)
    is_verified_purchase = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["restaurant", "-created_at"], name="review_rest_created_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.rating}/5 for {self.restaurant} (order {self.order_id})"
