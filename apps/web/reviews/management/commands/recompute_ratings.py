"""
Recompute every restaurant's rating accumulators from stored reviews.

Resets each restaurant to the seed (16/4) plus the sum and count of its
reviews. Safe to run repeatedly.

Usage:
    python apps/web/manage.py recompute_ratings
    python apps/web/manage.py recompute_ratings --restaurant 42
"""

import logging
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from apps.web.restaurant.models import Restaurant
from apps.web.reviews.services import recompute_restaurant_ratings

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Recompute restaurant rating accumulators from stored reviews"

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--restaurant",
            type=int,
            help="Only recompute this restaurant ID",
        )

    def handle(self, *_args: Any, **options: Any) -> None:
        restaurants = Restaurant.objects.order_by("pk")
        if options["restaurant"] is not None:
            restaurants = restaurants.filter(pk=options["restaurant"])
            if not restaurants.exists():
                raise CommandError(f"Restaurant {options['restaurant']} not found")

        checked = 0
        fixed = 0
        for restaurant in restaurants.iterator():
            checked += 1
            if recompute_restaurant_ratings(restaurant):
                fixed += 1

        logger.info("Recomputed ratings: %s checked, %s corrected", checked, fixed)
        self.stdout.write(f"Checked {checked} restaurants, corrected {fixed}")
