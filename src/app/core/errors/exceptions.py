"""Domain exceptions for the application.

Subclasses of ``AppException`` are converted to RFC 7807 Problem Details
responses by the exception handlers. Token errors are internal to the
token codec and are translated by the authentication gate before they
reach a client.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all errors that cross the HTTP boundary.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a resource is absent or hidden from the caller.

    Example:
        raise NotFoundError("Exercise not found", resource="exercise")
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when a unique key is already taken.

    Example:
        raise ConflictError("User already exists")
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ValidationError(AppException):
    """Raised when request data fails domain validation.

    Example:
        raise ValidationError(
            "Unknown exercise",
            errors=[{"field": "exercises.0.exercise_id", "message": "not found"}],
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class UnauthenticatedError(AppException):
    """Raised when a credential is missing, invalid or expired."""

    message = "Authentication required"
    error_code = "unauthenticated"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when an authenticated caller may not perform an action.

    Example:
        raise ForbiddenError(
            "Insufficient permissions",
            details={"required_permissions": ["DELETE"]},
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class TokenError(Exception):
    """Base class for token verification failures."""


class InvalidTokenError(TokenError):
    """The token is malformed, carries bad claims or fails its signature."""


class ExpiredTokenError(TokenError):
    """The token signature is valid but its expiry has passed."""
