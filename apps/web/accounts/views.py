"""
Account views - Session authentication and profile.

- POST /api/auth/register
- POST /api/auth/login
- POST /api/auth/logout
- GET /api/users/profile
"""

import logging
from typing import TYPE_CHECKING

from django.contrib.auth import authenticate, login, logout
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.web.accounts.serializers import LoginRequest, RegisterRequest, UserSchema
from apps.web.core.decorators import api_login_required
from apps.web.core.exceptions import Conflict, Unauthorized
from apps.web.core.http import json_response, parse_body
from apps.web.core.models import User
from apps.web.restaurant.models import Restaurant, RestaurantStatus

if TYPE_CHECKING:
    from apps.web.restaurant.serializers import RestaurantRegistrationSchema

logger = logging.getLogger(__name__)


def serialize_user(user: User) -> UserSchema:
    restaurant = user.restaurant
    return UserSchema(
        id=user.pk,
        name=user.name,
        email=user.email,
        phone=user.phone,
        role=user.role,
        restaurant_id=restaurant.pk if restaurant else None,
        restaurant_status=restaurant.status if restaurant else None,
    )


def _create_restaurant(details: "RestaurantRegistrationSchema") -> Restaurant:
    address = details.address
    return Restaurant.objects.create(
        name=details.name,
        description=details.description,
        cuisine=details.cuisine,
        image_url=details.image_url,
        street=address.street,
        city=address.city,
        state=address.state,
        pincode=address.pincode,
        latitude=address.latitude,
        longitude=address.longitude,
        fssai_license_number=details.fssai_license_number,
        gst_number=details.gst_number,
        status=RestaurantStatus.PENDING_APPROVAL,
    )


@csrf_exempt
@require_POST
def register(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/register

    Creates a customer, or an admin plus a restaurant awaiting approval, and
    starts a session.
    """
    data = parse_body(request, RegisterRequest)
    email = data.email.lower()

    if User.objects.filter(Q(email=email) | Q(phone=data.phone)).exists():
        raise Conflict("User with this email or phone already exists")

    try:
        with transaction.atomic():
            restaurant = None
            if data.role == User.Role.ADMIN and data.restaurant_details:
                restaurant = _create_restaurant(data.restaurant_details)
            user = User.objects.create_user(
                username=email,
                email=email,
                password=data.password,
                name=data.name,
                phone=data.phone,
                role=data.role,
                restaurant=restaurant,
            )
    except IntegrityError as exc:
        raise Conflict("User with this email or phone already exists") from exc

    login(request, user, backend="django.contrib.auth.backends.ModelBackend")
    logger.info("Registered %s user %s", user.role, user.pk)
    return json_response(serialize_user(user).model_dump(mode="json"), 201)


@csrf_exempt
@require_POST
def login_view(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/login

    Body: {"loginIdentifier": "<email or phone>", "password": "..."}
    """
    data = parse_body(request, LoginRequest)
    identifier = data.login_identifier.strip()

    account = (
        User.objects.filter(Q(email__iexact=identifier) | Q(phone=identifier))
        .only("username")
        .first()
    )
    user = None
    if account is not None:
        user = authenticate(request, username=account.username, password=data.password)

    if user is None:
        logger.warning("Failed login for %s", identifier)
        raise Unauthorized("Invalid credentials")

    login(request, user)
    return json_response(serialize_user(user).model_dump(mode="json"))


@csrf_exempt
@require_POST
def logout_view(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/logout
    """
    logout(request)
    return json_response({"message": "Logged out successfully"})


@require_GET
@api_login_required
def profile(request: HttpRequest) -> JsonResponse:
    """
    GET /api/users/profile
    """
    return json_response(serialize_user(request.user).model_dump(mode="json"))  # type: ignore[arg-type]
