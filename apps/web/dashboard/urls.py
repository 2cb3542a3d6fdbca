"""
Admin API routes under /api/admin/.

Restaurant admin (own restaurant) and super admin (platform) endpoints.
"""

from django.urls import path

from apps.web.orders import views as order_views
from apps.web.restaurant import views as restaurant_views

from . import views

app_name = "dashboard"

urlpatterns = [
    # Restaurant admin
    path("orders", order_views.admin_order_list, name="orders"),
    path(
        "orders/<int:order_id>/status",
        order_views.admin_update_order_status,
        name="order_status",
    ),
    path(
        "restaurant/status",
        restaurant_views.update_open_status,
        name="restaurant_open_status",
    ),
    # Super admin
    path("stats", views.system_stats, name="stats"),
    path("restaurants", views.all_restaurants, name="restaurants"),
    path("restaurants/pending", views.pending_restaurants, name="pending_restaurants"),
    path(
        "restaurants/<int:restaurant_id>/status",
        views.update_restaurant_status,
        name="restaurant_status",
    ),
    path("users", views.all_users, name="users"),
    path("orders/all", views.all_orders, name="all_orders"),
]
