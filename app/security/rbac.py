"""Role-based access control. No FastAPI."""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet

from app.security.exceptions import InsufficientPermissionsError


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    SUPERVISOR = "supervisor"
    WORKER = "worker"


@dataclass(frozen=True)
class IdentityContext:
    """Authenticated caller, taken from verified token claims."""

    id: int
    username: str
    role: Role


class RoleAuthorizer:
    """Check the caller's role against an operation's allow-list. Roles are flat: no role implies another."""

    def check(self, identity: IdentityContext, allowed_roles: AbstractSet[Role]) -> None:
        """Raises InsufficientPermissionsError if identity.role is not in allowed_roles."""
        if identity.role not in allowed_roles:
            raise InsufficientPermissionsError()
