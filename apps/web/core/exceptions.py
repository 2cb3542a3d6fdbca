"""
API error taxonomy.

Services raise these; ApiErrorMiddleware renders them as JSON.
"""


class ApiError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, details: list[dict[str, str]] | None = None) -> None:
        self.message = message
        self.details = details or []
        super().__init__(message)


class ValidationFailed(ApiError):
    """Missing or malformed input."""

    status_code = 400


class InvalidState(ApiError):
    """Entity is not in a state that allows the operation."""

    status_code = 400


class Unauthorized(ApiError):
    """No authenticated session."""

    status_code = 401


class Forbidden(ApiError):
    """Authenticated, but wrong role or owner."""

    status_code = 403


class NotFound(ApiError):
    """Entity does not exist."""

    status_code = 404


class Conflict(ApiError):
    """Write collides with existing state (e.g. duplicate review)."""

    status_code = 409
