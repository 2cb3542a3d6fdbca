"""
URL routing for payment endpoints.
"""

from django.urls import path

from apps.web.payments import views

app_name = "payments"

urlpatterns = [
    path("payment/create-order", views.create_payment_order, name="create_order"),
    path("payment/verify-payment", views.verify_payment, name="verify_payment"),
]
