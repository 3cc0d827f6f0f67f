"""Unit tests for the ownership and visibility policy."""

from types import SimpleNamespace
from uuid import uuid4

import pytest

from app.core.auth.schemas import AuthenticatedIdentity
from app.core.errors import ForbiddenError, NotFoundError
from app.core.permissions.policy import OwnershipPolicy, Visibility
from app.core.permissions.roles import Role, get_role_catalog


pytestmark = pytest.mark.unit


def make_identity(role: Role) -> AuthenticatedIdentity:
    return AuthenticatedIdentity(
        id=uuid4(),
        username=f"{role.lower()}-user",
        role=role,
        permissions=get_role_catalog().permissions_for(role),
    )


def make_resource(owner_id, visibility: Visibility | None = None) -> SimpleNamespace:
    resource = SimpleNamespace(id=uuid4(), owner_id=owner_id)
    if visibility is not None:
        resource.visibility = visibility
    return resource


@pytest.fixture
def owner() -> AuthenticatedIdentity:
    return make_identity(Role.WRITER)


@pytest.fixture
def stranger() -> AuthenticatedIdentity:
    return make_identity(Role.WRITER)


@pytest.fixture
def admin() -> AuthenticatedIdentity:
    return make_identity(Role.ADMIN)


class TestVisibilityAwareReads:
    """Read rules for resources with a visibility flag."""

    policy = OwnershipPolicy("exercise", visibility_aware=True)

    def test_owner_reads_private(self, owner):
        resource = make_resource(owner.id, Visibility.PRIVATE)

        assert self.policy.can_read(resource, owner)

    def test_stranger_reads_public(self, owner, stranger):
        resource = make_resource(owner.id, Visibility.PUBLIC)

        assert self.policy.can_read(resource, stranger)

    def test_stranger_cannot_read_private(self, owner, stranger):
        resource = make_resource(owner.id, Visibility.PRIVATE)

        assert not self.policy.can_read(resource, stranger)

    def test_admin_cannot_read_private(self, owner, admin):
        """ADMIN gets no read bypass for private rows."""
        resource = make_resource(owner.id, Visibility.PRIVATE)

        assert not self.policy.can_read(resource, admin)

    def test_ownerless_is_readable(self, stranger):
        resource = make_resource(None, Visibility.PRIVATE)

        assert self.policy.can_read(resource, stranger)

    def test_hidden_reads_as_not_found(self, owner, stranger):
        """A hidden row should raise the same error as a missing one."""
        resource = make_resource(owner.id, Visibility.PRIVATE)

        with pytest.raises(NotFoundError) as hidden:
            self.policy.ensure_readable(resource, stranger)
        with pytest.raises(NotFoundError) as missing:
            self.policy.ensure_readable(None, stranger)

        assert hidden.value.message == missing.value.message
        assert hidden.value.details == missing.value.details


class TestOwnerOnlyReads:
    """Read rules for resources without a visibility flag."""

    policy = OwnershipPolicy("workout", visibility_aware=False)

    def test_owner_reads(self, owner):
        assert self.policy.can_read(make_resource(owner.id), owner)

    def test_stranger_cannot_read(self, owner, stranger):
        assert not self.policy.can_read(make_resource(owner.id), stranger)

    def test_admin_reads_everything(self, owner, admin):
        assert self.policy.can_read(make_resource(owner.id), admin)

    def test_ownerless_is_readable(self, stranger):
        assert self.policy.can_read(make_resource(None), stranger)


class TestMutations:
    """Update and delete rules, shared by every resource type."""

    policy = OwnershipPolicy("exercise", visibility_aware=True)

    def test_owner_can_mutate(self, owner):
        resource = make_resource(owner.id, Visibility.PRIVATE)

        assert self.policy.ensure_mutable(resource, owner, "update") is resource

    def test_public_row_still_owner_only(self, owner, stranger):
        """Being able to read a public row grants no right to change it."""
        resource = make_resource(owner.id, Visibility.PUBLIC)

        with pytest.raises(ForbiddenError) as exc_info:
            self.policy.ensure_mutable(resource, stranger, "delete")

        assert exc_info.value.error_code == "not_owner"

    def test_admin_bypasses_ownership(self, owner, admin):
        resource = make_resource(owner.id, Visibility.PRIVATE)

        assert self.policy.ensure_mutable(resource, admin, "delete") is resource

    def test_ownerless_is_admin_only(self, stranger, admin):
        resource = make_resource(None, Visibility.PUBLIC)

        assert not self.policy.can_mutate(resource, stranger)
        assert self.policy.can_mutate(resource, admin)

    def test_missing_resource_is_not_found(self, owner):
        with pytest.raises(NotFoundError):
            self.policy.ensure_mutable(None, owner, "update")
