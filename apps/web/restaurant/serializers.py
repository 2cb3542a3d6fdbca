"""
Pydantic schemas for restaurant API requests and responses.

These schemas define the public API contract for restaurant data.
"""

from datetime import datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from apps.web.restaurant.models import Restaurant

# =============================================================================
# Menu
# =============================================================================


class MenuItemSchema(BaseModel):
    """A menu item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Decimal
    category: str
    image_url: str
    is_available: bool


class MenuItemCreateRequest(BaseModel):
    """Request body for POST /api/restaurants/menu."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1, max_length=100)
    image_url: str = Field(default="", max_length=200)
    is_available: bool = True


class MenuItemUpdateRequest(BaseModel):
    """Request body for PUT /api/restaurants/menu/{item_id}. All fields optional."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    image_url: str | None = Field(default=None, max_length=200)
    is_available: bool | None = None


# =============================================================================
# Restaurant
# =============================================================================


class AddressSchema(BaseModel):
    """Restaurant address with geo point."""

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field(..., min_length=1, max_length=20)
    latitude: float = 0
    longitude: float = 0


class RestaurantSummarySchema(BaseModel):
    """A restaurant as shown in listings."""

    id: int
    name: str
    description: str
    cuisine: list[str]
    image_url: str
    address: AddressSchema
    status: str
    is_open: bool
    opening_time: str  # HH:MM format
    closing_time: str  # HH:MM format
    average_rating: float
    total_rating_count: int


class RestaurantDetailSchema(RestaurantSummarySchema):
    """A restaurant with its full menu."""

    menu_items: list[MenuItemSchema] = Field(default_factory=list)
    created_at: datetime


class RestaurantRegistrationSchema(BaseModel):
    """Restaurant details submitted with an admin registration."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    cuisine: list[str] = Field(..., min_length=1)
    address: AddressSchema
    fssai_license_number: str = Field(..., min_length=1, max_length=50)
    gst_number: str = Field(default="", max_length=50)
    image_url: str = Field(default="", max_length=200)


class OpenStatusRequest(BaseModel):
    """Request body for PUT /api/admin/restaurant/status."""

    is_open: bool
    opening_time: time | None = None
    closing_time: time | None = None


class OpenStatusResponse(BaseModel):
    """Response for PUT /api/admin/restaurant/status."""

    message: str
    is_open: bool
    opening_time: str
    closing_time: str


class RestaurantStatusRequest(BaseModel):
    """Request body for PUT /api/admin/restaurants/{id}/status."""

    status: str = Field(..., pattern=r"^(pending|pending_approval|approved|rejected)$")


# =============================================================================
# Model -> schema helpers
# =============================================================================


def _hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def serialize_restaurant(restaurant: "Restaurant") -> RestaurantSummarySchema:
    """Serialize a Restaurant model for listings."""
    return RestaurantSummarySchema(
        id=restaurant.pk,
        name=restaurant.name,
        description=restaurant.description,
        cuisine=restaurant.cuisine,
        image_url=restaurant.image_url,
        address=AddressSchema(
            street=restaurant.street,
            city=restaurant.city,
            state=restaurant.state,
            pincode=restaurant.pincode,
            latitude=restaurant.latitude,
            longitude=restaurant.longitude,
        ),
        status=restaurant.status,
        is_open=restaurant.is_open,
        opening_time=_hhmm(restaurant.opening_time),
        closing_time=_hhmm(restaurant.closing_time),
        average_rating=restaurant.average_rating,
        total_rating_count=restaurant.total_rating_count,
    )


def serialize_restaurant_detail(restaurant: "Restaurant") -> RestaurantDetailSchema:
    """Serialize a Restaurant model with its menu items."""
    summary = serialize_restaurant(restaurant)
    return RestaurantDetailSchema(
        **summary.model_dump(),
        menu_items=[
            MenuItemSchema.model_validate(item) for item in restaurant.menuitems.all()
        ],
        created_at=restaurant.created_at,
    )
