"""
Restaurant models - Profiles, approval status, menus and rating accumulators.

MenuItem follows the multi-tenancy pattern with RestaurantScopedModel.
"""

from datetime import time

from django.db import models

from apps.web.core.models import RestaurantScopedModel

# Every restaurant starts as if it had four 4-star ratings.
RATING_SEED_SUM = 16
RATING_SEED_COUNT = 4


class RestaurantStatus(models.TextChoices):
    """Platform approval status."""

    PENDING = "pending", "Pending"
    PENDING_APPROVAL = "pending_approval", "Pending Approval"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"


class Restaurant(models.Model):
    """
    A restaurant on the platform - the tenant.

    Owned by exactly one admin User (reverse accessor: owner).
    """

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    cuisine = models.JSONField(
        default=list,
        blank=True,
        help_text='List of cuisines (e.g., ["North Indian", "Chinese"])',
    )
    image_url = models.URLField(blank=True)

    # Address
    street = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    pincode = models.CharField(max_length=20)
    latitude = models.FloatField(default=0)
    longitude = models.FloatField(default=0)

    # Compliance
    fssai_license_number = models.CharField(max_length=50)
    gst_number = models.CharField(max_length=50, blank=True)

    status = models.CharField(
        max_length=20,
        choices=RestaurantStatus.choices,
        default=RestaurantStatus.PENDING,
    )

    # Operating state
    is_open = models.BooleanField(default=True)
    opening_time = models.TimeField(default=time(9, 0))
    closing_time = models.TimeField(default=time(22, 0))

    # Rating accumulators (average_rating == total_rating_sum / total_rating_count)
    total_rating_sum = models.PositiveIntegerField(default=RATING_SEED_SUM)
    total_rating_count = models.PositiveIntegerField(default=RATING_SEED_COUNT)
    average_rating = models.FloatField(
        default=RATING_SEED_SUM / RATING_SEED_COUNT
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="restaurant_status_idx"),
            models.Index(fields=["city"], name="restaurant_city_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def is_approved(self) -> bool:
        return self.status == RestaurantStatus.APPROVED

    def add_rating(self, rating: int) -> None:
        """Fold one rating into the running sum/count and recompute the mean."""
        self.total_rating_sum += rating
        self.total_rating_count += 1
        self.average_rating = self.total_rating_sum / self.total_rating_count


class MenuItem(RestaurantScopedModel):
    """
    Individual menu item.

    Owned by its restaurant; only the owning admin may mutate it.
    """

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    category = models.CharField(max_length=100)
    image_url = models.URLField(blank=True)

    # Availability (sold out when False)
    is_available = models.BooleanField(default=True)

    class Meta:
        ordering = ["category", "name"]
        indexes = [
            models.Index(
                fields=["restaurant", "category"], name="menuitem_rest_category_idx"
            ),
            models.Index(
                fields=["restaurant", "is_available"], name="menuitem_rest_available_idx"
            ),
        ]

    def __str__(self) -> str:
        return self.name
