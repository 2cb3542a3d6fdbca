"""
Custom managers for multi-tenancy.

RestaurantScopedManager filters queries by the admin's restaurant.
"""

from typing import TYPE_CHECKING, Any, TypeVar

from django.db import models

if TYPE_CHECKING:
    from django.http import HttpRequest

    from .models import RestaurantScopedModel

_T = TypeVar("_T", bound="RestaurantScopedModel")


class RestaurantScopedManager(models.Manager[_T]):
    """
    Manager that filters by restaurant.

    Usage in views:
        # Automatically scoped to request.restaurant
        orders = Order.objects.for_restaurant(request).all()

    SECURITY: Always use for_restaurant() in admin views, never raw querysets.
    """

    def for_restaurant(self, request: "HttpRequest") -> models.QuerySet[_T]:
        """
        Filter queryset by the restaurant attached to the request.

        Args:
            request: HttpRequest with .restaurant attribute (set by RestaurantMiddleware)

        Returns:
            QuerySet filtered to the request's restaurant

        Raises:
            ValueError: If request has no restaurant attached
        """
        restaurant: Any = getattr(request, "restaurant", None)
        if restaurant is None:
            msg = "Request has no restaurant attached. Is RestaurantMiddleware enabled?"
            raise ValueError(msg)
        return self.filter(restaurant=restaurant)
