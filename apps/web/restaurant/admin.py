"""Admin registration for restaurant models."""

from django.contrib import admin

from apps.web.restaurant.models import MenuItem, Restaurant


class MenuItemInline(admin.TabularInline):
    """Inline for items on a restaurant's menu."""

    model = MenuItem
    extra = 0
    fields = ["name", "category", "price", "is_available"]


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    """Admin for restaurants."""

    list_display = ["name", "city", "status", "is_open", "average_rating", "created_at"]
    list_filter = ["status", "is_open", "city"]
    search_fields = ["name", "city", "fssai_license_number"]
    inlines = [MenuItemInline]
    readonly_fields = [
        "total_rating_sum",
        "total_rating_count",
        "average_rating",
        "created_at",
        "updated_at",
    ]

    fieldsets = [
        (None, {"fields": ["name", "description", "cuisine", "image_url", "status"]}),
        (
            "Address",
            {"fields": ["street", "city", "state", "pincode", "latitude", "longitude"]},
        ),
        ("Compliance", {"fields": ["fssai_license_number", "gst_number"]}),
        ("Hours", {"fields": ["is_open", "opening_time", "closing_time"]}),
        (
            "Ratings",
            {"fields": ["total_rating_sum", "total_rating_count", "average_rating"]},
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    """Admin for menu items."""

    list_display = ["name", "restaurant", "category", "price", "is_available"]
    list_filter = ["is_available", "restaurant"]
    search_fields = ["name", "description", "category"]
    readonly_fields = ["created_at", "updated_at"]
