"""Django app configuration for notifications module."""

from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    """Real-time notification fan-out over Channels."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.notifications"
    verbose_name = "Notifications"
