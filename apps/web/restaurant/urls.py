"""
URL routing for restaurant API endpoints.

Listing and detail are public; menu management requires a restaurant admin.
"""

from django.urls import path

from apps.web.restaurant import views

app_name = "restaurant"

urlpatterns = [
    path("restaurants", views.restaurant_list, name="restaurant_list"),
    # Specific routes must come before <int:restaurant_id>
    path("restaurants/my-restaurant", views.my_restaurant, name="my_restaurant"),
    path("restaurants/menu", views.add_menu_item, name="menu_add"),
    path(
        "restaurants/menu/<int:item_id>",
        views.menu_item_detail,
        name="menu_item_detail",
    ),
    path(
        "restaurants/<int:restaurant_id>",
        views.restaurant_detail,
        name="restaurant_detail",
    ),
]
