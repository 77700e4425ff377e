"""Users API router. Listing, creation and (de)activation are admin-only; profiles are owner-scoped."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies import CurrentIdentity, get_user_service, require_roles
from app.application.user_service import UserService
from app.domain.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest
from app.security import policies
from app.security.rbac import IdentityContext

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=list[UserResponse])
async def list_users(
    identity: Annotated[IdentityContext, Depends(require_roles(policies.LIST_USERS))],
    user_service: UserServiceDep,
):
    return await user_service.list_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, identity: CurrentIdentity, user_service: UserServiceDep):
    return await user_service.get_user(user_id)


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    body: UserCreateRequest,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.CREATE_USER))],
    user_service: UserServiceDep,
):
    return await user_service.create_user(body, actor_id=identity.id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: UserUpdateRequest,
    identity: CurrentIdentity,
    user_service: UserServiceDep,
):
    return await user_service.update_user(identity, user_id, body)


@router.patch("/{user_id}/deactivate", response_model=UserResponse)
async def deactivate_user(
    user_id: int,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.DEACTIVATE_USER))],
    user_service: UserServiceDep,
):
    return await user_service.set_active(identity, user_id, active=False)


@router.patch("/{user_id}/activate", response_model=UserResponse)
async def activate_user(
    user_id: int,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.ACTIVATE_USER))],
    user_service: UserServiceDep,
):
    return await user_service.set_active(identity, user_id, active=True)
