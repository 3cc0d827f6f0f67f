"""Permission system for role-based access control (RBAC).

The request-level gate lives in ``app.core.permissions.dependencies``;
it depends on the auth schemas and is imported from there directly.
"""

from app.core.permissions.checker import (
    check_permissions,
    has_permissions,
    missing_permissions,
)
from app.core.permissions.policy import OwnershipPolicy, Visibility
from app.core.permissions.roles import (
    DEFAULT_ROLE_PERMISSIONS,
    Permission,
    Role,
    RoleCatalog,
    get_role_catalog,
)


__all__ = [
    "DEFAULT_ROLE_PERMISSIONS",
    "OwnershipPolicy",
    "Permission",
    "Role",
    "RoleCatalog",
    "Visibility",
    "check_permissions",
    "get_role_catalog",
    "has_permissions",
    "missing_permissions",
]
