"""Auth API router: POST /auth/register, POST /auth/login, GET /auth/me."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies import CurrentIdentity, get_auth_service
from app.application.auth_service import AuthService
from app.domain.schemas.auth import LoginRequest, LoginResponse, RegisterResponse
from app.domain.schemas.user import UserCreateRequest, UserResponse

router = APIRouter()

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(body: UserCreateRequest, auth_service: AuthServiceDep):
    """Self-registration. Role defaults to worker."""
    return await auth_service.register(body)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, auth_service: AuthServiceDep):
    """Exchange username/password for a 24h bearer token. Any failure is 401 "Invalid credentials"."""
    return await auth_service.login(body.username, body.password)


@router.get("/me", response_model=UserResponse)
async def me(identity: CurrentIdentity, auth_service: AuthServiceDep):
    return await auth_service.current_user(identity)
