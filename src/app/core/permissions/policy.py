"""Per-instance ownership and visibility rules.

The permission gate decides whether an identity may perform an action on
a resource type at all. The policy here runs afterwards and decides
whether the identity may touch one specific row.

Read rules:
    visibility-aware resources: public rows, own rows and ownerless rows.
    other resources: own rows, ownerless rows, and anything for ADMIN.
    A row the identity cannot read is reported as not found, so private
    rows of other users are indistinguishable from missing ones.

Mutation rules (update, delete), regardless of visibility:
    the owner, or ADMIN. Ownerless rows are mutable by ADMIN only.
"""

from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, TypeVar
from uuid import UUID

import structlog
from sqlalchemy import ColumnElement, or_, true

from app.core.errors import ForbiddenError, NotFoundError
from app.core.permissions.roles import Role


if TYPE_CHECKING:
    from app.core.auth.schemas import AuthenticatedIdentity


logger = structlog.get_logger()


class Visibility(StrEnum):
    """Default read access of a resource, independent of ownership."""

    PUBLIC = "public"
    PRIVATE = "private"


class OwnedResource(Protocol):
    id: Any
    owner_id: UUID | None


ResourceT = TypeVar("ResourceT", bound=OwnedResource)


def is_admin(identity: "AuthenticatedIdentity") -> bool:
    return identity.role == Role.ADMIN


class OwnershipPolicy:
    """Ownership and visibility checks for one resource type.

    Attributes:
        resource_name: Name used in error messages and logs
        visibility_aware: Whether rows carry a ``visibility`` column
    """

    def __init__(self, resource_name: str, visibility_aware: bool) -> None:
        self.resource_name = resource_name
        self.visibility_aware = visibility_aware

    def can_read(self, resource: OwnedResource, identity: "AuthenticatedIdentity") -> bool:
        """Check whether an identity may read a resource."""
        if resource.owner_id is None or resource.owner_id == identity.id:
            return True
        if self.visibility_aware:
            return getattr(resource, "visibility", None) == Visibility.PUBLIC
        return is_admin(identity)

    def can_mutate(
        self, resource: OwnedResource, identity: "AuthenticatedIdentity"
    ) -> bool:
        """Check whether an identity may update or delete a resource."""
        if resource.owner_id is not None and resource.owner_id == identity.id:
            return True
        return is_admin(identity)

    def readable_clause(
        self, model: Any, identity: "AuthenticatedIdentity"
    ) -> ColumnElement[bool]:
        """Build the SQL filter matching the rows an identity may read.

        Args:
            model: Mapped class with ``owner_id`` (and ``visibility``)
            identity: The authenticated identity

        Returns:
            Boolean clause for use in list and search queries
        """
        if not self.visibility_aware and is_admin(identity):
            return true()
        return self.user_readable_clause(model, identity.id)

    def user_readable_clause(
        self, model: Any, user_id: UUID | None
    ) -> ColumnElement[bool]:
        """Build the SQL filter matching the rows a non-ADMIN user may read.

        Used when acting for someone else, e.g. an ADMIN editing another
        user's workout. ``user_id`` None matches only shared rows.
        """
        conditions = [model.owner_id.is_(None)]
        if user_id is not None:
            conditions.append(model.owner_id == user_id)
        if self.visibility_aware:
            conditions.append(model.visibility == Visibility.PUBLIC)
        return or_(*conditions)

    def ensure_readable(
        self,
        resource: ResourceT | None,
        identity: "AuthenticatedIdentity",
    ) -> ResourceT:
        """Return the resource if the identity may read it.

        Raises:
            NotFoundError: If the resource is missing or hidden
        """
        if resource is None or not self.can_read(resource, identity):
            raise self._not_found()
        return resource

    def ensure_mutable(
        self,
        resource: ResourceT | None,
        identity: "AuthenticatedIdentity",
        action: str,
    ) -> ResourceT:
        """Return the resource if the identity may update or delete it.

        Args:
            resource: The loaded resource, or None if it does not exist
            identity: The authenticated identity
            action: "update" or "delete", for messages and logs

        Raises:
            NotFoundError: If the resource does not exist
            ForbiddenError: If the identity is neither owner nor ADMIN
        """
        if resource is None:
            raise self._not_found()

        if not self.can_mutate(resource, identity):
            logger.warning(
                "ownership_denied",
                resource=self.resource_name,
                resource_id=str(resource.id),
                user_id=str(identity.id),
                action=action,
            )
            raise ForbiddenError(
                f"Not authorized to {action} this {self.resource_name}",
                error_code="not_owner",
            )

        if resource.owner_id != identity.id:
            logger.warning(
                "admin_ownership_bypass",
                resource=self.resource_name,
                resource_id=str(resource.id),
                owner_id=str(resource.owner_id) if resource.owner_id else None,
                user_id=str(identity.id),
                action=action,
            )
        return resource

    def _not_found(self) -> NotFoundError:
        return NotFoundError(
            f"{self.resource_name.capitalize()} not found",
            resource=self.resource_name,
        )
