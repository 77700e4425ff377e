"""Pydantic schemas for login and registration responses."""

from pydantic import BaseModel, Field

from app.domain.schemas.user import PublicUser, UserResponse


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    user: PublicUser


class RegisterResponse(BaseModel):
    message: str = "User created successfully"
    user: UserResponse
