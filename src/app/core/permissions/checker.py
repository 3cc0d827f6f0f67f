"""Permission checking logic.

Coarse-grained checks against the permission set carried by an
authenticated identity. These are pure functions: the permissions come
from verified token claims, so no database access is needed.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from app.core.errors import ForbiddenError
from app.core.permissions.roles import Permission


if TYPE_CHECKING:
    from app.core.auth.schemas import AuthenticatedIdentity


logger = structlog.get_logger()


def missing_permissions(
    identity: "AuthenticatedIdentity",
    required: Iterable[Permission],
) -> set[Permission]:
    """Get the required permissions an identity lacks.

    Args:
        identity: The authenticated identity
        required: Permissions the operation needs

    Returns:
        The permissions in ``required`` not held by the identity
    """
    return set(required) - set(identity.permissions)


def has_permissions(
    identity: "AuthenticatedIdentity",
    required: Iterable[Permission],
) -> bool:
    """Check that an identity holds every required permission."""
    return not missing_permissions(identity, required)


def check_permissions(
    identity: "AuthenticatedIdentity",
    required: Iterable[Permission],
    endpoint: str | None = None,
) -> None:
    """Raise unless an identity holds every required permission.

    Args:
        identity: The authenticated identity
        required: Permissions the operation needs
        endpoint: Request path, for logging

    Raises:
        ForbiddenError: If any required permission is missing
    """
    required = set(required)
    missing = missing_permissions(identity, required)
    if not missing:
        return

    required_names = sorted(str(p) for p in required)
    logger.warning(
        "permission_denied",
        user_id=str(identity.id),
        role=str(identity.role),
        required_permissions=required_names,
        missing_permissions=sorted(str(p) for p in missing),
        endpoint=endpoint or "unknown",
    )
    raise ForbiddenError(
        f"Missing required permissions: {', '.join(required_names)}",
        error_code="permission_denied",
        details={"required_permissions": required_names},
    )
