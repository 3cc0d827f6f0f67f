"""Unit tests for the role catalog."""

import pytest

from app.core.permissions.roles import (
    DEFAULT_ROLE_PERMISSIONS,
    Permission,
    Role,
    RoleCatalog,
    get_role_catalog,
)


pytestmark = pytest.mark.unit


class TestRoleCatalog:
    """Tests for RoleCatalog lookups."""

    def test_default_table(self):
        """The default catalog grants ADMIN everything and VISITOR READ only."""
        catalog = get_role_catalog()

        assert catalog.permissions_for(Role.ADMIN) == {
            Permission.READ,
            Permission.WRITE,
            Permission.UPDATE,
            Permission.DELETE,
        }
        assert catalog.permissions_for(Role.WRITER) == {
            Permission.READ,
            Permission.WRITE,
        }
        assert catalog.permissions_for(Role.VISITOR) == {Permission.READ}

    def test_default_role_is_visitor(self):
        """permissions_for(None) should use the default role."""
        catalog = get_role_catalog()

        assert catalog.default_role == Role.VISITOR
        assert catalog.permissions_for() == {Permission.READ}

    def test_catalog_is_shared(self):
        """get_role_catalog should return the same instance every time."""
        assert get_role_catalog() is get_role_catalog()

    def test_knows_roles_by_name(self):
        """knows should accept enum members and their string values."""
        catalog = get_role_catalog()

        assert catalog.knows(Role.WRITER)
        assert catalog.knows("ADMIN")
        assert not catalog.knows("SUPERUSER")

    def test_roles(self):
        """roles should list every role in the table."""
        assert get_role_catalog().roles == {Role.ADMIN, Role.WRITER, Role.VISITOR}

    def test_table_is_read_only(self):
        """The catalog's table cannot be modified through the default mapping."""
        with pytest.raises(TypeError):
            DEFAULT_ROLE_PERMISSIONS[Role.VISITOR] = frozenset()  # type: ignore[index]

    def test_custom_catalog(self):
        """A catalog built from a custom table should use that table."""
        catalog = RoleCatalog(
            {Role.VISITOR: [Permission.READ], Role.WRITER: [Permission.WRITE]},
            default_role=Role.WRITER,
        )

        assert catalog.permissions_for() == {Permission.WRITE}
        assert not catalog.knows(Role.ADMIN)

    def test_default_role_must_be_in_table(self):
        """A default role missing from the table should be rejected."""
        with pytest.raises(ValueError):
            RoleCatalog({Role.ADMIN: [Permission.READ]}, default_role=Role.VISITOR)

    def test_unknown_role_raises(self):
        """Looking up a role the catalog lacks should raise KeyError."""
        catalog = RoleCatalog({Role.VISITOR: [Permission.READ]})

        with pytest.raises(KeyError):
            catalog.permissions_for(Role.ADMIN)
