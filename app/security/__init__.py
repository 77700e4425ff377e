"""Security: token issuance and verification, RBAC, ownership rules, password hashing. No FastAPI."""

from app.security.ownership import OwnershipPolicy
from app.security.passwords import PasswordHasher
from app.security.rbac import IdentityContext, Role, RoleAuthorizer
from app.security.tokens import TokenService

__all__ = [
    "IdentityContext",
    "OwnershipPolicy",
    "PasswordHasher",
    "Role",
    "RoleAuthorizer",
    "TokenService",
]
