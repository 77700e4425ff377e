"""Ownership rules for owner- or assignee-scoped operations. No FastAPI."""

from typing import AbstractSet, Optional

from app.security.exceptions import InsufficientPermissionsError
from app.security.rbac import IdentityContext, Role


class OwnershipPolicy:
    """
    Roles in elevated_roles act on any resource. Everyone else acts only on
    resources whose owner reference equals their own id. Never mutates the
    owner reference.
    """

    def __init__(self, elevated_roles: AbstractSet[Role]) -> None:
        self._elevated_roles = frozenset(elevated_roles)

    def is_elevated(self, identity: IdentityContext) -> bool:
        return identity.role in self._elevated_roles

    def check(self, identity: IdentityContext, owner_id: Optional[int]) -> None:
        """Raises InsufficientPermissionsError if identity may not act on a resource owned by owner_id."""
        if self.is_elevated(identity):
            return
        if owner_id is None or identity.id != owner_id:
            raise InsufficientPermissionsError()

    def default_owner_filter(
        self,
        identity: IdentityContext,
        requested_owner_id: Optional[int],
    ) -> Optional[int]:
        """
        Owner filter for list reads. A non-elevated caller who asked for no
        owner is scoped to their own rows; an explicit filter is kept as given.
        """
        if requested_owner_id is None and not self.is_elevated(identity):
            return identity.id
        return requested_owner_id


TASK_OWNERSHIP = OwnershipPolicy({Role.ADMIN, Role.MANAGER, Role.SUPERVISOR})
LEAVE_REQUEST_OWNERSHIP = OwnershipPolicy({Role.ADMIN, Role.MANAGER, Role.SUPERVISOR})
DOCUMENT_OWNERSHIP = OwnershipPolicy({Role.ADMIN})
USER_PROFILE_OWNERSHIP = OwnershipPolicy({Role.ADMIN})
