"""Authentication backend for password hashing and signed tokens.

This module provides:
- Password hashing with bcrypt
- The token codec, which issues and verifies HS256 JWTs that carry the
  caller's id, username, role and permissions, so request handling never
  needs a database lookup to authorize
"""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any, Protocol
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.config import settings
from app.core.auth.schemas import TokenClaims
from app.core.constants import BCRYPT_ROUNDS
from app.core.errors import ExpiredTokenError, InvalidTokenError
from app.core.permissions.roles import Permission, Role, RoleCatalog, get_role_catalog


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


# ============================================================
# Password Utilities
# ============================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash in constant time.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify_password() -> None:
    """Spend the time of one hash verification without a real hash.

    Used when a login names an unknown user so the response time does not
    reveal whether the username exists.
    """
    pwd_context.dummy_verify()


# ============================================================
# Token Codec
# ============================================================


class TokenSubject(Protocol):
    id: UUID
    username: str
    role: Role | str
    permissions: Any


class TokenCodec:
    """Issues and verifies signed, time-limited access tokens.

    The signing key is process-wide; replacing it invalidates every token
    issued before. There is no revocation list, so claims stay trusted
    until they expire.

    Attributes:
        catalog: Role catalog used to reject tokens with unknown roles
        default_ttl: Lifetime used when ``issue`` gets no ttl
    """

    def __init__(
        self,
        secret_key: str,
        catalog: RoleCatalog,
        algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(minutes=60),
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.catalog = catalog
        self.default_ttl = default_ttl

    def claims_for(
        self,
        subject: TokenSubject,
        ttl: timedelta | None = None,
    ) -> TokenClaims:
        """Build the claims a token for ``subject`` would carry.

        Args:
            subject: A user or identity with id, username, role, permissions
            ttl: Optional lifetime, defaults to ``default_ttl``

        Returns:
            Claims with expiry truncated to whole seconds
        """
        lifetime = self.default_ttl if ttl is None else ttl
        expires_at = (datetime.now(UTC) + lifetime).replace(microsecond=0)
        return TokenClaims(
            id=subject.id,
            username=subject.username,
            role=subject.role,
            permissions=frozenset(subject.permissions),
            expires_at=expires_at,
        )

    def encode(self, claims: TokenClaims) -> str:
        """Sign a set of claims into a JWT."""
        to_encode: dict[str, Any] = {
            "sub": str(claims.id),
            "username": claims.username,
            "role": str(claims.role),
            "permissions": sorted(str(p) for p in claims.permissions),
            "exp": int(claims.expires_at.timestamp()),
            "iat": int(datetime.now(UTC).timestamp()),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def issue(self, subject: TokenSubject, ttl: timedelta | None = None) -> str:
        """Issue a signed token for a user or identity.

        Args:
            subject: A user or identity with id, username, role, permissions
            ttl: Optional lifetime, defaults to ``default_ttl``

        Returns:
            Encoded JWT
        """
        return self.encode(self.claims_for(subject, ttl))

    def verify(self, token: str) -> TokenClaims:
        """Verify a token and return its claims.

        Args:
            token: The encoded JWT

        Returns:
            The claims embedded at issue time

        Raises:
            ExpiredTokenError: If the signature is valid but the token expired
            InvalidTokenError: For any other verification failure
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError as exc:
            raise ExpiredTokenError("Token has expired") from exc
        except JWTError as exc:
            raise InvalidTokenError("Token could not be verified") from exc

        role = payload.get("role")
        if not isinstance(role, str) or not self.catalog.knows(role):
            raise InvalidTokenError("Token carries an unknown role")

        try:
            return TokenClaims(
                id=payload["sub"],
                username=payload["username"],
                role=Role(role),
                permissions=frozenset(Permission(p) for p in payload["permissions"]),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Token claims are malformed") from exc


@lru_cache
def get_token_codec() -> TokenCodec:
    """Get the process-wide token codec built from settings."""
    return TokenCodec(
        secret_key=settings.secret_key,
        catalog=get_role_catalog(),
        algorithm=settings.jwt_algorithm,
        default_ttl=settings.access_token_ttl,
    )
