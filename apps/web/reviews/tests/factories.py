"""Factory classes for review models."""

import factory

from apps.web.orders.models import OrderStatus
from apps.web.orders.tests.factories import OrderFactory
from apps.web.reviews.models import Review


class DeliveredOrderFactory(OrderFactory):
    status = OrderStatus.DELIVERED


class ReviewFactory(factory.django.DjangoModelFactory):
    """Factory for a Review of a delivered order (does not touch accumulators)."""

    class Meta:
        model = Review

    order = factory.SubFactory(DeliveredOrderFactory)
    user = factory.SelfAttribute("order.user")
    restaurant = factory.SelfAttribute("order.restaurant")
    rating = 4
    comment = factory.Faker("sentence")
