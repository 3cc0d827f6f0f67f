"""FastAPI dependencies for authentication.

The authentication gate reads the bearer token from the Authorization
header, verifies it with the token codec and attaches the resolved
identity to the request. Invalid and expired tokens are rejected with
the same error so clients cannot tell which check failed.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.auth.backend import TokenCodec, get_token_codec
from app.core.auth.schemas import AuthenticatedIdentity
from app.core.errors import ExpiredTokenError, TokenError, UnauthenticatedError


logger = structlog.get_logger()

# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)

TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]


def resolve_identity(token: str | None, codec: TokenCodec) -> AuthenticatedIdentity:
    """Turn a raw bearer token into an identity.

    Args:
        token: The token, or None if the request carried none
        codec: Codec holding the signing key

    Returns:
        The identity embedded in the token

    Raises:
        UnauthenticatedError: If the token is missing, invalid or expired
    """
    if not token:
        raise UnauthenticatedError(
            "Missing authentication token",
            error_code="missing_token",
        )

    try:
        claims = codec.verify(token)
    except TokenError as exc:
        logger.info(
            "authentication_failed",
            reason="expired" if isinstance(exc, ExpiredTokenError) else "invalid",
        )
        raise UnauthenticatedError(
            "Invalid or expired token",
            error_code="invalid_token",
        ) from exc

    return claims.identity()


async def authenticate(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    codec: TokenCodecDep,
) -> AuthenticatedIdentity:
    """Authentication gate: verify the bearer token and attach the identity.

    Args:
        request: The incoming request
        credentials: Bearer token credentials from the request
        codec: The token codec

    Returns:
        The authenticated identity

    Raises:
        UnauthenticatedError: If the token is missing, invalid or expired
    """
    identity = resolve_identity(
        credentials.credentials if credentials else None,
        codec,
    )

    request.state.identity = identity
    structlog.contextvars.bind_contextvars(
        user_id=str(identity.id),
        username=identity.username,
    )
    return identity


CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(authenticate)]
