"""Exception hierarchy for the listings API.

Each error carries the HTTP status it maps to; ``app.main`` renders them as
``{"detail", "error", "fields"}`` JSON bodies.
"""

from __future__ import annotations


class ListingError(Exception):
    """Base exception for all listing errors."""

    status_code = 500
    kind = "error"

    def __init__(self, message: str = "", fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class ValidationError(ListingError):
    """Raised when a field is missing or malformed."""

    status_code = 400
    kind = "validation"


class UnauthorizedError(ListingError):
    """Raised when a credential is missing, unknown or expired."""

    status_code = 401
    kind = "unauthorized"


class ForbiddenError(ListingError):
    """Raised when the caller's role is not on the route's allow-list."""

    status_code = 403
    kind = "forbidden"


class NotFoundError(ListingError):
    """Raised when a referenced record does not exist."""

    status_code = 404
    kind = "not_found"


class ConflictError(ListingError):
    """Raised when an update carries a stale version or a duplicate key."""

    status_code = 409
    kind = "conflict"


class InvalidTransitionError(ConflictError):
    """Raised when a schedule status change is not permitted."""

    kind = "invalid_transition"


class PayloadError(ListingError):
    """Raised when an upload exceeds the image count or is not an image."""

    status_code = 413
    kind = "payload"

    def __init__(self, message: str = "", status_code: int = 413):
        super().__init__(message)
        self.status_code = status_code
