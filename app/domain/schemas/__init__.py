"""Pydantic request/response schemas. No DB or infrastructure."""

from app.domain.schemas.auth import LoginRequest, LoginResponse, RegisterResponse
from app.domain.schemas.user import PublicUser, UserCreateRequest, UserResponse, UserUpdateRequest

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "PublicUser",
    "RegisterResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
