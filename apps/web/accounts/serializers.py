"""Pydantic schemas for authentication and profile endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from apps.web.restaurant.serializers import RestaurantRegistrationSchema


class RegisterRequest(BaseModel):
    """
    Request body for POST /api/auth/register.

    Admins register together with their restaurant (restaurantDetails).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(..., pattern=r"^\+?\d{10,15}$")
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["customer", "admin"] = "customer"
    restaurant_details: RestaurantRegistrationSchema | None = None

    @model_validator(mode="after")
    def admin_needs_restaurant(self) -> "RegisterRequest":
        if self.role == "admin" and self.restaurant_details is None:
            raise ValueError("restaurantDetails is required for admin registration")
        return self


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login. Identifier is email or phone."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    login_identifier: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserSchema(BaseModel):
    """The authenticated user's profile."""

    id: int
    name: str
    email: str
    phone: str | None
    role: str
    restaurant_id: int | None
    restaurant_status: str | None
