"""
Request middleware - CORS, tenant resolution and API error rendering.
"""

import logging
import traceback
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse

from .exceptions import ApiError
from .http import cors_headers, json_response

if TYPE_CHECKING:
    from apps.web.restaurant.models import Restaurant

logger = logging.getLogger(__name__)


class CorsMiddleware:
    """
    CORS for the single-page client on /api/ paths.

    Answers preflight OPTIONS requests directly and adds the CORS headers to
    every /api/ response, including error bodies and 405s.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not request.path.startswith("/api/"):
            return self.get_response(request)

        if request.method == "OPTIONS":
            response: HttpResponse = JsonResponse({})
        else:
            response = self.get_response(request)

        for key, value in cors_headers().items():
            response[key] = value
        return response


class RestaurantMiddleware:
    """
    Middleware that attaches the current restaurant to the request.

    The restaurant is the one owned by the authenticated restaurant admin.
    Customers, superadmins and anonymous users get request.restaurant = None.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        # Skip for Django admin
        if request.path.startswith("/django-admin/"):
            return self.get_response(request)

        request.restaurant = self._get_restaurant(request)  # type: ignore[attr-defined]
        return self.get_response(request)

    def _get_restaurant(self, request: HttpRequest) -> "Restaurant | None":
        """Resolve restaurant from the session user."""
        user: Any = request.user
        if not user.is_authenticated or not user.is_restaurant_admin:
            return None
        return user.restaurant


class ApiErrorMiddleware:
    """
    Render exceptions raised by /api/ views as JSON {"message": ...} bodies.

    ApiError subclasses carry their own status code. Http404 and
    PermissionDenied map to 404 and 403. Anything else is a 500 with the
    stack trace included only when DEBUG is on.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(
        self, request: HttpRequest, exception: Exception
    ) -> JsonResponse | None:
        if not request.path.startswith("/api/"):
            return None

        if isinstance(exception, ApiError):
            body: dict[str, Any] = {"message": exception.message}
            if exception.details:
                body["details"] = exception.details
            if exception.status_code >= 500:
                logger.error("API error on %s: %s", request.path, exception.message)
            else:
                logger.warning(
                    "Rejected %s %s (%s): %s",
                    request.method,
                    request.path,
                    exception.status_code,
                    exception.message,
                )
            return json_response(body, exception.status_code)

        if isinstance(exception, Http404):
            return json_response({"message": str(exception) or "Not found"}, 404)

        if isinstance(exception, PermissionDenied):
            return json_response({"message": str(exception) or "Not authorized"}, 403)

        logger.exception("Unhandled error on %s %s", request.method, request.path)
        body = {"message": "Server error"}
        if settings.DEBUG:
            body["stack"] = traceback.format_exception(exception)
        return json_response(body, 500)
