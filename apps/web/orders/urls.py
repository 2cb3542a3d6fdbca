"""
URL routing for customer order endpoints.

Restaurant admin order endpoints live under /api/admin/ (dashboard urls).
"""

from django.urls import path

from apps.web.orders import views

app_name = "orders"

urlpatterns = [
    path("orders", views.create_order, name="create_order"),
    path("orders/history", views.order_history, name="order_history"),
    path("orders/<int:order_id>", views.order_detail, name="order_detail"),
]
