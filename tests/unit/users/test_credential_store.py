"""Unit tests for the credential store with a mocked repository."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.core.auth.backend import hash_password
from app.core.errors import ConflictError, UnauthenticatedError
from app.core.permissions.roles import Permission, Role, get_role_catalog
from app.modules.users.models import User
from app.modules.users.services import CredentialStore


pytestmark = pytest.mark.unit


@pytest.fixture
def repo() -> MagicMock:
    """A UserRepository double whose create echoes the entity back."""
    repo = MagicMock()
    repo.get_by_username = AsyncMock(return_value=None)

    async def _create(user: User) -> User:
        user.id = uuid4()
        return user

    repo.create = AsyncMock(side_effect=_create)
    return repo


@pytest.fixture
def store(repo: MagicMock) -> CredentialStore:
    return CredentialStore(repo, get_role_catalog())


class TestCreate:
    """Tests for CredentialStore.create."""

    async def test_default_role_and_permissions(self, store):
        """Without a role the user becomes a VISITOR with READ only."""
        user = await store.create("vera", "pw")

        assert user.role == Role.VISITOR
        assert user.permissions == ["READ"]

    async def test_role_defaults_come_from_catalog(self, store):
        user = await store.create("walt", "pw", role=Role.WRITER)

        assert user.permissions == ["READ", "WRITE"]

    async def test_secret_is_hashed(self, store):
        user = await store.create("vera", "pw")

        assert user.password_hash != "pw"
        assert store.verify_secret(user, "pw")

    async def test_explicit_permissions_are_kept(self, store):
        """An explicit permission set replaces the role default unchecked."""
        user = await store.create(
            "eve",
            "pw",
            role=Role.VISITOR,
            permissions=[Permission.DELETE, Permission.READ],
        )

        assert user.role == Role.VISITOR
        assert user.permissions == ["DELETE", "READ"]

    async def test_duplicate_username(self, store, repo):
        """An existing username should raise ConflictError without writing."""
        repo.get_by_username.return_value = User(username="vera", password_hash="x")

        with pytest.raises(ConflictError) as exc_info:
            await store.create("vera", "pw")

        assert exc_info.value.status_code == 409
        repo.create.assert_not_awaited()


class TestAuthenticate:
    """Tests for CredentialStore.authenticate."""

    async def test_valid_credentials(self, store, repo):
        user = User(username="vera", password_hash=hash_password("pw"))
        repo.get_by_username.return_value = user

        assert await store.authenticate("vera", "pw") is user

    async def test_wrong_password_and_unknown_user_fail_alike(self, store, repo):
        """Both failures should raise the same error with the same message."""
        repo.get_by_username.return_value = User(
            username="vera", password_hash=hash_password("pw")
        )
        with pytest.raises(UnauthenticatedError) as wrong_password:
            await store.authenticate("vera", "nope")

        repo.get_by_username.return_value = None
        with pytest.raises(UnauthenticatedError) as unknown_user:
            await store.authenticate("nobody", "pw")

        assert wrong_password.value.message == unknown_user.value.message
        assert wrong_password.value.error_code == unknown_user.value.error_code
