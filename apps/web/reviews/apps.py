"""Django app configuration for reviews module."""

from django.apps import AppConfig


class ReviewsConfig(AppConfig):
    """Reviews app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.reviews"
    verbose_name = "Reviews"
