"""
JSON request/response helpers shared by the API views.
"""

import json
from typing import Any, TypeVar

from django.conf import settings
from django.http import HttpRequest, JsonResponse

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationFailed

_S = TypeVar("_S", bound=BaseModel)


def cors_headers() -> dict[str, str]:
    """CORS headers for the single-page client (cookie sessions need credentials)."""
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOWED_ORIGIN,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Idempotency-Key",
    }


def json_response(data: dict[str, Any] | list[Any], status: int = 200) -> JsonResponse:
    """Create a JSON response with CORS headers."""
    response = JsonResponse(data, status=status, safe=False)
    for key, value in cors_headers().items():
        response[key] = value
    return response


def parse_body(request: HttpRequest, schema: type[_S]) -> _S:
    """
    Parse and validate a JSON request body against a pydantic schema.

    Raises:
        ValidationFailed: On malformed JSON or schema violations, with one
            {field, message} entry per pydantic error.
    """
    try:
        body = json.loads(request.body or b"{}")
    except json.JSONDecodeError as exc:
        raise ValidationFailed("Invalid JSON in request body") from exc

    try:
        return schema.model_validate(body)
    except PydanticValidationError as e:
        details = [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
            }
            for err in e.errors()
        ]
        raise ValidationFailed("Validation failed", details=details) from e


def query_int(request: HttpRequest, name: str, default: int) -> int:
    """Read a positive integer query parameter, falling back to `default`."""
    try:
        value = int(request.GET.get(name, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default
