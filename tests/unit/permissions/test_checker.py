"""Unit tests for permission checking and the permission gate."""

from types import SimpleNamespace
from uuid import uuid4

import pytest

from app.core.auth.schemas import AuthenticatedIdentity
from app.core.errors import ForbiddenError, UnauthenticatedError
from app.core.permissions.checker import (
    check_permissions,
    has_permissions,
    missing_permissions,
)
from app.core.permissions.dependencies import require_permissions
from app.core.permissions.roles import Permission, Role


pytestmark = pytest.mark.unit


def make_identity(role: Role, *permissions: Permission) -> AuthenticatedIdentity:
    return AuthenticatedIdentity(
        id=uuid4(),
        username=f"{role.lower()}-user",
        role=role,
        permissions=frozenset(permissions),
    )


def make_request(identity: AuthenticatedIdentity | None) -> SimpleNamespace:
    state = SimpleNamespace()
    if identity is not None:
        state.identity = identity
    return SimpleNamespace(state=state, url=SimpleNamespace(path="/api/v1/exercises"))


class TestCheckPermissions:
    """Tests for the pure permission checks."""

    def test_missing_permissions(self):
        """missing_permissions should return required minus held."""
        identity = make_identity(Role.WRITER, Permission.READ, Permission.WRITE)

        missing = missing_permissions(identity, {Permission.WRITE, Permission.DELETE})

        assert missing == {Permission.DELETE}

    def test_has_permissions(self):
        """has_permissions should require every listed permission."""
        identity = make_identity(Role.WRITER, Permission.READ, Permission.WRITE)

        assert has_permissions(identity, [Permission.READ, Permission.WRITE])
        assert not has_permissions(identity, [Permission.READ, Permission.UPDATE])

    def test_empty_requirement_always_passes(self):
        """No required permissions should pass even with no permissions held."""
        identity = make_identity(Role.VISITOR)

        check_permissions(identity, [])

    def test_check_raises_forbidden_with_required_list(self):
        """check_permissions should raise ForbiddenError naming what is required."""
        identity = make_identity(Role.VISITOR, Permission.READ)

        with pytest.raises(ForbiddenError) as exc_info:
            check_permissions(identity, [Permission.DELETE], endpoint="/x")

        assert exc_info.value.status_code == 403
        assert exc_info.value.error_code == "permission_denied"
        assert exc_info.value.details["required_permissions"] == ["DELETE"]

    def test_role_is_not_consulted(self):
        """Only the permission set matters, not the role name."""
        demoted_admin = make_identity(Role.ADMIN, Permission.READ)

        with pytest.raises(ForbiddenError):
            check_permissions(demoted_admin, [Permission.UPDATE])


class TestPermissionGate:
    """Tests for the require_permissions dependency."""

    async def test_gate_returns_identity(self):
        """The gate should hand back the attached identity when allowed."""
        identity = make_identity(Role.VISITOR, Permission.READ)
        gate = require_permissions(Permission.READ)

        assert await gate(make_request(identity)) is identity

    async def test_gate_without_identity_is_unauthenticated(self):
        """The gate should refuse with 401 when no identity was attached."""
        gate = require_permissions(Permission.READ)

        with pytest.raises(UnauthenticatedError) as exc_info:
            await gate(make_request(None))

        assert exc_info.value.error_code == "auth_required"

    async def test_gate_checks_all_permissions(self):
        """The gate should require every permission it was built with."""
        identity = make_identity(Role.WRITER, Permission.READ, Permission.WRITE)
        gate = require_permissions(Permission.WRITE, Permission.UPDATE)

        with pytest.raises(ForbiddenError):
            await gate(make_request(identity))
