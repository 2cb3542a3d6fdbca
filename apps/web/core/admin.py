"""Admin registrations for core models."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):  # type: ignore[type-arg]
    list_display = ["username", "email", "name", "role", "restaurant", "is_active"]
    list_filter = ["is_staff", "is_active", "role"]
    search_fields = ["username", "email", "name", "phone"]
    fieldsets = (
        *BaseUserAdmin.fieldsets,  # type: ignore[misc]
        ("Platform", {"fields": ("name", "phone", "role", "restaurant")}),
    )
    add_fieldsets = (
        *BaseUserAdmin.add_fieldsets,
        ("Platform", {"fields": ("email", "name", "phone", "role", "restaurant")}),
    )
