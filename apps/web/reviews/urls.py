"""
URL routing for review endpoints.
"""

from django.urls import path

from apps.web.reviews import views

app_name = "reviews"

urlpatterns = [
    path("reviews/order/<int:order_id>", views.submit_order_review, name="submit_review"),
    path(
        "reviews/restaurant/<int:restaurant_id>",
        views.restaurant_reviews,
        name="restaurant_reviews",
    ),
    path("reviews/can-review/<int:order_id>", views.can_review_order, name="can_review"),
]
