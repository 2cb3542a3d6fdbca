"""
Decorators for request handling, role checks and validation.
"""

import json
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.core.cache import cache
from django.http import HttpRequest

from .exceptions import Forbidden, Unauthorized
from .http import json_response
from .models import User


def api_login_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Require an authenticated session.

    Unlike django's login_required this never redirects; API callers get a
    401 JSON response instead.
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        if not request.user.is_authenticated:
            raise Unauthorized("Not authorized, no session")
        return view_func(request, *args, **kwargs)

    return wrapper


def role_required(*roles: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Require an authenticated user whose role is one of `roles`.

    Usage:
        @role_required(User.Role.CUSTOMER)
        def create_order(request):
            ...
    """

    def decorator(view_func: Callable[..., Any]) -> Callable[..., Any]:
        @api_login_required
        @wraps(view_func)
        def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
            if request.user.role not in roles:  # type: ignore[union-attr]
                raise Forbidden(f"Not authorized as {' or '.join(roles)}.")
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator


superadmin_required = role_required(User.Role.SUPERADMIN)


def restaurant_admin_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Require a restaurant admin whose restaurant has been approved.

    request.restaurant is guaranteed to be set inside the view.
    """

    @role_required(User.Role.ADMIN)
    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        restaurant = getattr(request, "restaurant", None)
        if restaurant is None:
            raise Forbidden(
                "Access Denied. Admin user is not associated with a restaurant."
            )
        if not restaurant.is_approved:
            raise Forbidden("Access Denied. Your restaurant is not yet approved.")
        return view_func(request, *args, **kwargs)

    return wrapper


def idempotency_key_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that requires an Idempotency-Key header for POST requests.

    If the same user sends the same key twice, returns the cached response
    from the first request. Cached responses are stored for 24 hours.

    Usage:
        @idempotency_key_required
        def create_order(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        key = request.headers.get("Idempotency-Key")

        if not key:
            return json_response(
                {"message": "Idempotency-Key header is required"}, 400
            )

        cache_key = f"idempotency:{request.user.pk}:{key}"
        cached = cache.get(cache_key)

        if cached:
            # Return cached response
            return json_response(cached["data"], cached["status"])

        # Call the actual view
        response = view_func(request, *args, **kwargs)

        # Cache successful responses for 24 hours
        if response.status_code < 400:
            cache.set(
                cache_key,
                {
                    "data": json.loads(response.content),
                    "status": response.status_code,
                },
                timeout=86400,  # 24 hours
            )

        return response

    return wrapper
