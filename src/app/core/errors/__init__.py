"""Error handling module with RFC 7807 Problem Details."""

from app.core.errors.exceptions import (
    AppException,
    ConflictError,
    ExpiredTokenError,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    TokenError,
    UnauthenticatedError,
    ValidationError,
)
from app.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    "AppException",
    "ConflictError",
    "ExpiredTokenError",
    "FieldError",
    "ForbiddenError",
    "InvalidTokenError",
    "NotFoundError",
    "ProblemDetail",
    "TokenError",
    "UnauthenticatedError",
    "ValidationError",
    "register_exception_handlers",
]
