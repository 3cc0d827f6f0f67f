"""Authentication schemas for identities and tokens."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.permissions.roles import Permission, Role


class AuthenticatedIdentity(BaseModel):
    """The caller resolved from a verified token.

    Attached to ``request.state.identity`` by the authentication gate and
    read by the permission gate and ownership policies.

    Attributes:
        id: The user's UUID
        username: The user's unique name
        role: Role assigned at registration
        permissions: Permission snapshot taken at registration
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    username: str
    role: Role
    permissions: frozenset[Permission]


class TokenClaims(AuthenticatedIdentity):
    """Claims embedded in an access token.

    Attributes:
        expires_at: Expiry, whole-second precision
    """

    expires_at: datetime

    def identity(self) -> AuthenticatedIdentity:
        """Drop token metadata and keep the identity fields."""
        return AuthenticatedIdentity(
            id=self.id,
            username=self.username,
            role=self.role,
            permissions=self.permissions,
        )


class TokenResponse(BaseModel):
    """Access token handed to a client."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds")
