"""Admin registration for reviews."""

from django.contrib import admin

from apps.web.reviews.models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Read-mostly admin for reviews."""

    list_display = ["order", "restaurant", "user", "rating", "created_at"]
    list_filter = ["rating", "restaurant"]
    search_fields = ["comment", "user__email", "restaurant__name"]
    readonly_fields = ["user", "restaurant", "order", "rating", "created_at", "updated_at"]
