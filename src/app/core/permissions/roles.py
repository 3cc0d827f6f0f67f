"""Roles, permissions and the role catalog.

The catalog is the single source of the role -> permission table. It is
built once per process and handed to everything that needs default
permissions or has to recognise a role, so the table is never
duplicated.
"""

from collections.abc import Iterable, Mapping
from enum import StrEnum
from functools import lru_cache
from types import MappingProxyType


class Permission(StrEnum):
    """Atomic capabilities checked by the permission gate."""

    READ = "READ"
    WRITE = "WRITE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class Role(StrEnum):
    """Named permission bundles assigned once per user."""

    ADMIN = "ADMIN"
    WRITER = "WRITER"
    VISITOR = "VISITOR"


DEFAULT_ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = MappingProxyType(
    {
        Role.ADMIN: frozenset(
            {Permission.READ, Permission.WRITE, Permission.UPDATE, Permission.DELETE}
        ),
        Role.WRITER: frozenset({Permission.READ, Permission.WRITE}),
        Role.VISITOR: frozenset({Permission.READ}),
    }
)


class RoleCatalog:
    """Read-only mapping of roles to their default permission sets.

    Attributes:
        default_role: Role given to users who register without one
    """

    def __init__(
        self,
        table: Mapping[Role, Iterable[Permission]],
        default_role: Role = Role.VISITOR,
    ) -> None:
        if default_role not in table:
            raise ValueError(f"Default role {default_role} is not in the catalog")
        self._table: Mapping[Role, frozenset[Permission]] = MappingProxyType(
            {role: frozenset(perms) for role, perms in table.items()}
        )
        self.default_role = default_role

    @property
    def roles(self) -> frozenset[Role]:
        """All roles the catalog knows."""
        return frozenset(self._table)

    def knows(self, role: Role | str) -> bool:
        return role in self._table

    def permissions_for(self, role: Role | None = None) -> frozenset[Permission]:
        """Get the default permission set for a role.

        Args:
            role: The role to look up; None selects the default role

        Returns:
            Frozen set of permissions

        Raises:
            KeyError: If the role is not in the catalog
        """
        return self._table[role or self.default_role]

    def __repr__(self) -> str:
        return f"<RoleCatalog(roles={sorted(self._table)}, default={self.default_role})>"


@lru_cache
def get_role_catalog() -> RoleCatalog:
    """Get the process-wide role catalog."""
    return RoleCatalog(DEFAULT_ROLE_PERMISSIONS)
