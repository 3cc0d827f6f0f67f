"""Credential store: registered identities and their secrets."""

from collections.abc import Iterable
from typing import Annotated

import structlog
from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from app.core.auth.backend import (
    dummy_verify_password,
    hash_password,
    verify_password,
)
from app.core.errors import ConflictError, UnauthenticatedError
from app.core.permissions.roles import Permission, Role, RoleCatalog, get_role_catalog
from app.modules.users.models import User
from app.modules.users.repos import UserRepo, UserRepository


logger = structlog.get_logger()


class CredentialStore:
    """Creates users and checks their secrets.

    Default permissions come from the injected role catalog and are stored
    on the user as a snapshot.
    """

    def __init__(self, repo: UserRepository, catalog: RoleCatalog) -> None:
        self.repo = repo
        self.catalog = catalog

    async def find_by_username(self, username: str) -> User | None:
        """Get a user by username, or None."""
        return await self.repo.get_by_username(username)

    async def create(
        self,
        username: str,
        secret: str,
        role: Role | None = None,
        permissions: Iterable[Permission] | None = None,
    ) -> User:
        """Register a new user.

        Args:
            username: Unique login name
            secret: Plain text password; only its hash is stored
            role: Role to assign, defaults to the catalog's default role
            permissions: Explicit permission set replacing the role default.
                Stored without checking it against the role.

        Returns:
            The created user

        Raises:
            ConflictError: If the username is already taken
        """
        if await self.repo.get_by_username(username) is not None:
            raise ConflictError("User already exists", error_code="user_exists")

        role = role or self.catalog.default_role
        if permissions is None:
            granted = self.catalog.permissions_for(role)
        else:
            granted = frozenset(permissions)
            # Overrides may exceed the role baseline; pending a product decision
            # they are accepted and only flagged here.
            excess = granted - self.catalog.permissions_for(role)
            logger.warning(
                "permission_override_unvalidated",
                username=username,
                role=str(role),
                permissions=sorted(str(p) for p in granted),
                exceeds_role=sorted(str(p) for p in excess),
            )

        user = User(
            username=username,
            password_hash=hash_password(secret),
            role=role,
            permissions=sorted(str(p) for p in granted),
        )
        try:
            user = await self.repo.create(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same name
            raise ConflictError("User already exists", error_code="user_exists") from exc

        logger.info("user_registered", user_id=str(user.id), role=str(user.role))
        return user

    def verify_secret(self, user: User, candidate: str) -> bool:
        """Compare a candidate password with the stored hash."""
        return verify_password(candidate, user.password_hash)

    async def authenticate(self, username: str, secret: str) -> User:
        """Return the user whose credentials match.

        Unknown usernames and wrong passwords fail identically.

        Raises:
            UnauthenticatedError: If the credentials do not match
        """
        user = await self.repo.get_by_username(username)
        if user is None:
            dummy_verify_password()
        elif self.verify_secret(user, secret):
            return user

        logger.info("login_failed")
        raise UnauthenticatedError(
            "Invalid credentials",
            error_code="invalid_credentials",
        )


def get_credential_store(
    repo: UserRepo,
    catalog: Annotated[RoleCatalog, Depends(get_role_catalog)],
) -> CredentialStore:
    return CredentialStore(repo, catalog)


CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]
