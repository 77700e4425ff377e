"""Pydantic schemas for identities: registration, profile updates, public projections."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.security.rbac import Role

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def _password_fits_bcrypt(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


class UserCreateRequest(BaseModel):
    """Used by both self-registration and admin user creation."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.WORKER

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _password_fits_bcrypt(v)


class UserUpdateRequest(BaseModel):
    """Partial profile update. Unset fields are left alone."""

    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[Role] = None
    password: Optional[str] = Field(None, min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: Optional[str]) -> Optional[str]:
        return _password_fits_bcrypt(v)


class PublicUser(BaseModel):
    """The identity projection returned at login. Never carries the password hash."""

    id: int
    username: str
    email: str
    full_name: str
    role: Role

    model_config = {"from_attributes": True}


class UserResponse(PublicUser):
    is_active: bool
    created_at: datetime
