"""Django app configuration for dashboard module."""

from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """Platform (super admin) dashboard API."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.dashboard"
    verbose_name = "Dashboard"
