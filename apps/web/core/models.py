"""
Core models - Users and the multi-tenancy foundation.

The tenant is a Restaurant. All restaurant-scoped models inherit from
RestaurantScopedModel.
"""

from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.db import models

from .managers import RestaurantScopedManager


class User(AbstractUser):
    """
    Custom user model with a role and an optional owned restaurant.

    Customers and superadmins have no restaurant; restaurant admins own one.
    """

    class Role(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        ADMIN = "admin", "Restaurant Admin"
        SUPERADMIN = "superadmin", "Super Admin"

    name = models.CharField(max_length=200, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, unique=True, null=True, blank=True)

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
    )
    restaurant = models.OneToOneField(
        "restaurant.Restaurant",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="owner",
        help_text="Required for restaurant admins",
    )

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"

    def clean(self) -> None:
        super().clean()
        if self.role == self.Role.ADMIN and self.restaurant_id is None:
            raise ValidationError({"restaurant": "Restaurant is required for admin users."})

    @property
    def is_customer(self) -> bool:
        return self.role == self.Role.CUSTOMER

    @property
    def is_restaurant_admin(self) -> bool:
        return self.role == self.Role.ADMIN

    @property
    def is_superadmin(self) -> bool:
        return self.role == self.Role.SUPERADMIN


class RestaurantScopedModel(models.Model):
    """
    Abstract base for all restaurant-scoped models.

    Provides:
    - Automatic restaurant FK
    - RestaurantScopedManager for filtered queries
    - Created/updated timestamps
    """

    restaurant = models.ForeignKey(
        "restaurant.Restaurant",
        on_delete=models.CASCADE,
        related_name="%(class)ss",  # e.g., restaurant.menuitems, restaurant.orders
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RestaurantScopedManager()

    class Meta:
        abstract = True
