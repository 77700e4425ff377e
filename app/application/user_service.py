"""User application service: identity lifecycle (create, update, activate, deactivate)."""

import logging
from typing import Optional

from app.domain.exceptions import DomainValidationError, DuplicateIdentityError, NotFoundError
from app.domain.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType
from app.infrastructure.database.models import User
from app.infrastructure.database.user_repository import DUPLICATE_IDENTITY_MESSAGE, UserRepository
from app.security.ownership import USER_PROFILE_OWNERSHIP
from app.security.passwords import PasswordHasher
from app.security.rbac import IdentityContext, Role

USER_NOT_FOUND_MESSAGE = "User not found"


class UserService:
    """
    Orchestrates user persistence and audit. No HTTP.
    Role allow-lists are enforced before these methods are called; profile
    ownership is enforced here.
    """

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        audit_logger: AuditLogger,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._hasher = hasher
        self._audit = audit_logger
        self._logger = logger

    async def list_users(self) -> list[UserResponse]:
        users = await self._repository.list_all()
        return [UserResponse.model_validate(u) for u in users]

    async def get_user(self, user_id: int) -> UserResponse:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return UserResponse.model_validate(user)

    async def create_user(
        self,
        request: UserCreateRequest,
        actor_id: Optional[int] = None,
    ) -> UserResponse:
        """
        Create an active user. actor_id is the admin creating the account;
        None means self-registration, where the new user is the actor.
        """
        if await self._repository.exists_with_username_or_email(request.username, request.email):
            raise DuplicateIdentityError(DUPLICATE_IDENTITY_MESSAGE)

        user = await self._repository.create(
            User(
                username=request.username,
                password_hash=self._hasher.hash(request.password),
                email=request.email,
                full_name=request.full_name,
                role=request.role.value,
                is_active=True,
            )
        )
        self._logger.info("user_created", extra={"user_id": user.id, "role": user.role})
        self._audit.record(
            user_id=actor_id if actor_id is not None else user.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.USER,
            entity_id=user.id,
            changes={"username": user.username, "role": user.role},
        )
        return UserResponse.model_validate(user)

    async def update_user(
        self,
        identity: IdentityContext,
        user_id: int,
        request: UserUpdateRequest,
    ) -> UserResponse:
        """Users edit their own profile; admins edit anyone. Only admins change roles."""
        USER_PROFILE_OWNERSHIP.check(identity, user_id)

        values = {}
        if request.email:
            values["email"] = request.email
        if request.full_name:
            values["full_name"] = request.full_name
        if request.role is not None and identity.role == Role.ADMIN:
            values["role"] = request.role.value
        if request.password:
            values["password_hash"] = self._hasher.hash(request.password)
        if not values:
            raise DomainValidationError("No fields to update")

        user = await self._repository.update_fields(user_id, values)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.USER,
            entity_id=user_id,
            changes={key: value for key, value in values.items() if key != "password_hash"},
        )
        return UserResponse.model_validate(user)

    async def set_active(self, identity: IdentityContext, user_id: int, active: bool) -> UserResponse:
        user = await self._repository.set_active(user_id, active)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        self._logger.info(
            "user_activated" if active else "user_deactivated",
            extra={"target_user_id": user_id},
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.ACTIVATE if active else AuditAction.DEACTIVATE,
            entity_type=AuditEntityType.USER,
            entity_id=user_id,
        )
        return UserResponse.model_validate(user)
