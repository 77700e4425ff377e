"""Domain layer: request/response schemas and exceptions. Pure business logic only."""

from app.domain.exceptions import (
    DomainError,
    DomainValidationError,
    DuplicateIdentityError,
    InvalidStateError,
    NotFoundError,
)
from app.domain.schemas import (
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "DomainError",
    "DomainValidationError",
    "DuplicateIdentityError",
    "InvalidStateError",
    "LoginRequest",
    "LoginResponse",
    "NotFoundError",
    "PublicUser",
    "RegisterResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
