"""
Integration tests for restaurant API views.
"""

from decimal import Decimal

from django.test import Client as DjangoClient

import pytest

from apps.web.restaurant.models import MenuItem, RestaurantStatus
from apps.web.restaurant.tests.factories import (
    AdminFactory,
    MenuItemFactory,
    RestaurantFactory,
    UserFactory,
)


@pytest.fixture
def api_client() -> DjangoClient:
    """Django test client for API requests."""
    return DjangoClient()


@pytest.fixture
def admin_client(api_client: DjangoClient):
    """Test client logged in as the admin of an approved restaurant."""
    admin = AdminFactory()
    api_client.force_login(admin)
    api_client.admin = admin  # type: ignore[attr-defined]
    return api_client


@pytest.mark.django_db
class TestRestaurantListView:
    """Tests for GET /api/restaurants."""

    def test_lists_only_approved(self, api_client: DjangoClient):
        approved = RestaurantFactory(name="Spice Route")
        RestaurantFactory(name="Hidden", status=RestaurantStatus.PENDING_APPROVAL)

        response = api_client.get("/api/restaurants")

        assert response.status_code == 200
        data = response.json()
        assert [r["id"] for r in data] == [approved.pk]
        assert data[0]["average_rating"] == 4.0
        assert data[0]["address"]["city"] == "Pune"
        assert data[0]["opening_time"] == "09:00"

    def test_search_matches_menu_item(self, api_client: DjangoClient):
        item = MenuItemFactory(name="Paneer Tikka")
        RestaurantFactory(name="Burger Barn")

        response = api_client.get("/api/restaurants", {"q": "paneer"})

        assert [r["id"] for r in response.json()] == [item.restaurant_id]

    def test_search_does_not_duplicate(self, api_client: DjangoClient):
        restaurant = RestaurantFactory(name="Tikka House")
        MenuItemFactory(restaurant=restaurant, name="Tikka Roll")
        MenuItemFactory(restaurant=restaurant, name="Tikka Bowl")

        response = api_client.get("/api/restaurants", {"q": "tikka"})

        assert len(response.json()) == 1

    def test_min_rating_filter(self, api_client: DjangoClient):
        RestaurantFactory(average_rating=3.5)
        high = RestaurantFactory(average_rating=4.6)

        response = api_client.get("/api/restaurants", {"minRating": "4.5"})

        assert [r["id"] for r in response.json()] == [high.pk]

    def test_min_rating_must_be_number(self, api_client: DjangoClient):
        response = api_client.get("/api/restaurants", {"minRating": "lots"})

        assert response.status_code == 400
        assert response.json()["message"] == "minRating must be a number"


@pytest.mark.django_db
class TestRestaurantDetailView:
    """Tests for GET /api/restaurants/{id}."""

    def test_returns_menu(self, api_client: DjangoClient):
        item = MenuItemFactory(name="Dal Makhani", price=Decimal("180.00"))

        response = api_client.get(f"/api/restaurants/{item.restaurant_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["menu_items"][0]["name"] == "Dal Makhani"
        assert data["menu_items"][0]["price"] == "180.00"

    def test_missing_restaurant_404(self, api_client: DjangoClient):
        response = api_client.get("/api/restaurants/99999")

        assert response.status_code == 404
        assert response.json() == {"message": "Restaurant not found."}


@pytest.mark.django_db
class TestMyRestaurantView:
    """Tests for GET /api/restaurants/my-restaurant."""

    def test_returns_own_restaurant(self, admin_client: DjangoClient):
        response = admin_client.get("/api/restaurants/my-restaurant")

        assert response.status_code == 200
        assert response.json()["id"] == admin_client.admin.restaurant_id  # type: ignore[attr-defined]

    def test_anonymous_401(self, api_client: DjangoClient):
        response = api_client.get("/api/restaurants/my-restaurant")

        assert response.status_code == 401

    def test_customer_403(self, api_client: DjangoClient):
        api_client.force_login(UserFactory())

        response = api_client.get("/api/restaurants/my-restaurant")

        assert response.status_code == 403

    def test_unapproved_restaurant_403(self, api_client: DjangoClient):
        admin = AdminFactory(restaurant__status=RestaurantStatus.PENDING_APPROVAL)
        api_client.force_login(admin)

        response = api_client.get("/api/restaurants/my-restaurant")

        assert response.status_code == 403
        assert "not yet approved" in response.json()["message"]


@pytest.mark.django_db
class TestMenuManagement:
    """Tests for /api/restaurants/menu endpoints."""

    def test_add_menu_item(self, admin_client: DjangoClient):
        response = admin_client.post(
            "/api/restaurants/menu",
            {"name": "Masala Dosa", "price": "120.00", "category": "South Indian"},
            content_type="application/json",
        )

        assert response.status_code == 201
        item = MenuItem.objects.get(pk=response.json()["id"])
        assert item.restaurant_id == admin_client.admin.restaurant_id  # type: ignore[attr-defined]

    def test_add_menu_item_validation(self, admin_client: DjangoClient):
        response = admin_client.post(
            "/api/restaurants/menu",
            {"name": "", "price": "-1"},
            content_type="application/json",
        )

        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["details"]}
        assert {"name", "price", "category"} <= fields

    def test_update_menu_item(self, admin_client: DjangoClient):
        item = MenuItemFactory(restaurant=admin_client.admin.restaurant)  # type: ignore[attr-defined]

        response = admin_client.put(
            f"/api/restaurants/menu/{item.pk}",
            {"price": "99.50", "is_available": False},
            content_type="application/json",
        )

        assert response.status_code == 200
        item.refresh_from_db()
        assert item.price == Decimal("99.50")
        assert item.is_available is False
        assert response.json()["menu_item"]["price"] == "99.50"

    def test_delete_menu_item(self, admin_client: DjangoClient):
        item = MenuItemFactory(restaurant=admin_client.admin.restaurant)  # type: ignore[attr-defined]

        response = admin_client.delete(f"/api/restaurants/menu/{item.pk}")

        assert response.status_code == 200
        assert not MenuItem.objects.filter(pk=item.pk).exists()

    def test_cannot_touch_other_restaurants_item(self, admin_client: DjangoClient):
        other = MenuItemFactory()

        response = admin_client.delete(f"/api/restaurants/menu/{other.pk}")

        assert response.status_code == 404
        assert MenuItem.objects.filter(pk=other.pk).exists()
