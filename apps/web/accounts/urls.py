"""
URL routing for authentication and profile endpoints.
"""

from django.urls import path

from apps.web.accounts import views

app_name = "accounts"

urlpatterns = [
    path("auth/register", views.register, name="register"),
    path("auth/login", views.login_view, name="login"),
    path("auth/logout", views.logout_view, name="logout"),
    path("users/profile", views.profile, name="profile"),
]
