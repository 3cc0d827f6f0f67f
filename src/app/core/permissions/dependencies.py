"""Permission gate dependencies for route protection.

The gate reads the identity the authentication gate attached to the
request and compares its permissions with what the route requires:

    @router.delete("/{exercise_id}")
    async def delete_exercise(exercise_id: UUID, identity: CanDelete): ...

Resource routers install the authentication gate as a router-level
dependency, which FastAPI resolves before any route-level dependency.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request

from app.core.auth.schemas import AuthenticatedIdentity
from app.core.errors import UnauthenticatedError
from app.core.permissions.checker import check_permissions
from app.core.permissions.roles import Permission


def require_permissions(
    *required: Permission,
) -> Callable[[Request], Awaitable[AuthenticatedIdentity]]:
    """Build a dependency that requires every given permission.

    Args:
        *required: Permissions the route needs

    Returns:
        Dependency resolving to the authenticated identity

    Raises:
        UnauthenticatedError: If no identity is attached to the request
        ForbiddenError: If the identity lacks a required permission
    """
    required_set = frozenset(required)

    async def permission_gate(request: Request) -> AuthenticatedIdentity:
        identity: AuthenticatedIdentity | None = getattr(
            request.state, "identity", None
        )
        if identity is None:
            raise UnauthenticatedError(
                "Authentication required",
                error_code="auth_required",
            )

        check_permissions(identity, required_set, endpoint=request.url.path)
        return identity

    return permission_gate


CanRead = Annotated[AuthenticatedIdentity, Depends(require_permissions(Permission.READ))]
CanWrite = Annotated[
    AuthenticatedIdentity, Depends(require_permissions(Permission.WRITE))
]
CanUpdate = Annotated[
    AuthenticatedIdentity, Depends(require_permissions(Permission.UPDATE))
]
CanDelete = Annotated[
    AuthenticatedIdentity, Depends(require_permissions(Permission.DELETE))
]
