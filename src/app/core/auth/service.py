"""Authentication service for registration, login and token issuing."""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends

from app.config import settings
from app.core.auth.backend import TokenCodec
from app.core.auth.dependencies import TokenCodecDep
from app.core.auth.schemas import TokenResponse
from app.modules.users.models import User
from app.modules.users.schemas import LoginRequest, RegisterRequest, TokenRequest
from app.modules.users.services import CredentialStore, CredentialStoreDep


class AuthService:
    """Service for authentication operations.

    Both token issuing paths (login and the token endpoint) go through the
    same credential store and codec; they differ only in token lifetime.
    """

    def __init__(self, store: CredentialStoreDep, codec: TokenCodecDep) -> None:
        self.store: CredentialStore = store
        self.codec: TokenCodec = codec

    async def register(self, data: RegisterRequest) -> User:
        """Register a new user.

        Raises:
            ConflictError: If the username is already taken
        """
        return await self.store.create(
            username=data.username,
            secret=data.password,
            role=data.role,
            permissions=data.permissions,
        )

    async def login(self, data: LoginRequest) -> TokenResponse:
        """Exchange a username and password for an access token.

        Raises:
            UnauthenticatedError: If the credentials are invalid
        """
        user = await self.store.authenticate(data.username, data.password)
        return self._token_for(user, self.codec.default_ttl)

    async def issue_token(self, data: TokenRequest) -> TokenResponse:
        """Issue a short-lived token, registering the user on first use.

        An existing user must present the right password. An unknown user
        is registered with the requested role and permissions when
        autoregistration is enabled.

        Raises:
            UnauthenticatedError: If the password is wrong, or the user is
                unknown and autoregistration is disabled
        """
        ttl = settings.token_endpoint_ttl

        if settings.token_autoregister and (
            await self.store.find_by_username(data.username) is None
        ):
            user = await self.register(data)
        else:
            user = await self.store.authenticate(data.username, data.password)
        return self._token_for(user, ttl)

    def _token_for(self, user: User, ttl: timedelta) -> TokenResponse:
        return TokenResponse(
            access_token=self.codec.issue(user, ttl),
            expires_in=int(ttl.total_seconds()),
        )


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
