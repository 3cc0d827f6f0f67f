"""Authentication module for signed tokens and password handling."""

from app.core.auth.backend import (
    TokenCodec,
    get_token_codec,
    hash_password,
    verify_password,
)
from app.core.auth.dependencies import CurrentIdentity, authenticate
from app.core.auth.middleware import RequestIdMiddleware
from app.core.auth.schemas import AuthenticatedIdentity, TokenClaims, TokenResponse


__all__ = [
    "AuthenticatedIdentity",
    "CurrentIdentity",
    "RequestIdMiddleware",
    "TokenClaims",
    "TokenCodec",
    "TokenResponse",
    "authenticate",
    "get_token_codec",
    "hash_password",
    "verify_password",
]
