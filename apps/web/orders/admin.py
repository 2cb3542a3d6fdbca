"""Admin registration for order models."""

from django.contrib import admin

from apps.web.orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    """Inline for items within an order."""

    model = OrderItem
    extra = 0
    fields = ["name", "quantity", "price", "line_total"]
    readonly_fields = ["name", "quantity", "price", "line_total"]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for orders."""

    list_display = [
        "id",
        "user",
        "restaurant",
        "status",
        "total_amount",
        "payment_method",
        "payment_status",
        "created_at",
    ]
    list_filter = ["status", "payment_method", "payment_status", "restaurant"]
    search_fields = ["user__email", "user__name", "payment_id"]
    inlines = [OrderItemInline]
    readonly_fields = [
        "created_at",
        "updated_at",
        "confirmed_at",
        "delivered_at",
        "cancelled_at",
    ]
    date_hierarchy = "created_at"

    fieldsets = [
        (None, {"fields": ["user", "restaurant", "status"]}),
        (
            "Delivery",
            {"fields": ["delivery_street", "delivery_city", "delivery_pincode"]},
        ),
        (
            "Payment",
            {
                "fields": [
                    "total_amount",
                    "payment_method",
                    "payment_status",
                    "payment_id",
                    "payment_reference",
                ]
            },
        ),
        (
            "Timestamps",
            {
                "fields": [
                    "created_at",
                    "updated_at",
                    "confirmed_at",
                    "delivered_at",
                    "cancelled_at",
                ]
            },
        ),
    ]
