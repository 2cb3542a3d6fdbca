"""
URL configuration for Platepass.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("django-admin/", admin.site.urls),
    # JSON API
    path("api/", include("apps.web.accounts.urls")),
    path("api/", include("apps.web.restaurant.urls")),
    path("api/", include("apps.web.orders.urls")),
    path("api/", include("apps.web.payments.urls")),
    path("api/", include("apps.web.reviews.urls")),
    path("api/admin/", include("apps.web.dashboard.urls")),
]
