"""Django app configuration for accounts module."""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Session authentication and user profile endpoints."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.accounts"
    verbose_name = "Accounts"
