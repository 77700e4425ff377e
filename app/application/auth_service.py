"""Authentication application service: credential verification, token issuance, registration."""

import logging

from app.application.user_service import UserService
from app.domain.exceptions import NotFoundError
from app.domain.schemas.auth import LoginResponse, RegisterResponse
from app.domain.schemas.user import PublicUser, UserCreateRequest, UserResponse
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType
from app.infrastructure.database.user_repository import UserRepository
from app.security.exceptions import AccountDeactivatedError, InvalidCredentialsError
from app.security.passwords import PasswordHasher
from app.security.rbac import IdentityContext, Role
from app.security.tokens import TokenService


class AuthService:
    """
    Credential verifier. Every login failure surfaces the same message, so a
    caller cannot tell an unknown username, a deactivated account and a wrong
    password apart.
    """

    def __init__(
        self,
        repository: UserRepository,
        user_service: UserService,
        hasher: PasswordHasher,
        token_service: TokenService,
        audit_logger: AuditLogger,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._users = user_service
        self._hasher = hasher
        self._tokens = token_service
        self._audit = audit_logger
        self._logger = logger

    async def login(self, username: str, password: str) -> LoginResponse:
        user = await self._repository.get_by_username(username)
        if user is None:
            self._hasher.burn(password)
            self._logger.info("login_rejected", extra={"reason": "unknown_username"})
            raise InvalidCredentialsError()

        # Checked before the password so the outcome never depends on whether it was right.
        if not user.is_active:
            self._logger.info("login_rejected", extra={"reason": "deactivated", "user_id": user.id})
            raise AccountDeactivatedError()

        if not self._hasher.verify(password, user.password_hash):
            self._logger.info("login_rejected", extra={"reason": "bad_password", "user_id": user.id})
            raise InvalidCredentialsError()

        token = self._tokens.issue(user_id=user.id, username=user.username, role=Role(user.role))
        self._logger.info("login_succeeded", extra={"user_id": user.id})
        self._audit.record(
            user_id=user.id,
            action=AuditAction.LOGIN,
            entity_type=AuditEntityType.AUTH,
            entity_id=user.id,
        )
        return LoginResponse(token=token, user=PublicUser.model_validate(user))

    async def register(self, request: UserCreateRequest) -> RegisterResponse:
        user = await self._users.create_user(request)
        return RegisterResponse(user=user)

    async def current_user(self, identity: IdentityContext) -> UserResponse:
        """Fresh profile for the token's identity. 404 if the row is gone."""
        try:
            return await self._users.get_user(identity.id)
        except NotFoundError:
            self._logger.warning("token_user_missing", extra={"user_id": identity.id})
            raise
