"""FastAPI dependency injection: storage session, token authentication, role guards, services."""

import logging
from typing import AbstractSet, Annotated, AsyncIterator, Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.attendance_service import AttendanceService
from app.application.auth_service import AuthService
from app.application.document_service import DocumentService
from app.application.equipment_service import EquipmentService
from app.application.material_service import MaterialService
from app.application.project_service import ProjectService
from app.application.task_service import TaskService
from app.application.user_service import UserService
from app.core.context import user_id_ctx
from app.governance.audit_logger import AuditLogger
from app.infrastructure.database.attendance_repository import (
    AttendanceRepository,
    LeaveRequestRepository,
)
from app.infrastructure.database.document_repository import DocumentRepository
from app.infrastructure.database.equipment_repository import (
    EquipmentBreakdownRepository,
    EquipmentMaintenanceRepository,
    EquipmentRepository,
)
from app.infrastructure.database.material_repository import (
    MaterialRepository,
    MaterialRequisitionRepository,
    MaterialUsageRepository,
)
from app.infrastructure.database.project_repository import ProjectRepository
from app.infrastructure.database.session import Database
from app.infrastructure.database.task_repository import TaskActivityRepository, TaskRepository
from app.infrastructure.database.user_repository import UserRepository
from app.security.passwords import PasswordHasher
from app.security.rbac import IdentityContext, Role, RoleAuthorizer
from app.security.tokens import TokenService

_bearer = HTTPBearer(auto_error=False)
_role_authorizer = RoleAuthorizer()


def get_database(request: Request) -> Database:
    """Return the Database built by create_app (request.app.state)."""
    return request.app.state.database


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_audit_logger(request: Request) -> AuditLogger:
    return request.app.state.audit_logger


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        yield session


async def get_current_identity(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> IdentityContext:
    """Verify the bearer token. Raises UnauthenticatedError (401) on any problem."""
    token = credentials.credentials if credentials else None
    identity = token_service.verify(token)
    user_id_ctx.set(identity.id)
    return identity


def require_roles(allowed_roles: AbstractSet[Role]) -> Callable[..., IdentityContext]:
    """Dependency factory: authenticated identity whose role is in allowed_roles, else 403."""

    async def dependency(
        identity: Annotated[IdentityContext, Depends(get_current_identity)],
    ) -> IdentityContext:
        _role_authorizer.check(identity, allowed_roles)
        return identity

    return dependency


CurrentIdentity = Annotated[IdentityContext, Depends(get_current_identity)]
Session = Annotated[AsyncSession, Depends(get_session)]
Audit = Annotated[AuditLogger, Depends(get_audit_logger)]
Hasher = Annotated[PasswordHasher, Depends(get_password_hasher)]


def get_user_service(session: Session, hasher: Hasher, audit_logger: Audit) -> UserService:
    return UserService(
        repository=UserRepository(session),
        hasher=hasher,
        audit_logger=audit_logger,
        logger=logging.getLogger("app.application.user_service"),
    )


def get_auth_service(
    session: Session,
    hasher: Hasher,
    audit_logger: Audit,
    user_service: Annotated[UserService, Depends(get_user_service)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    return AuthService(
        repository=UserRepository(session),
        user_service=user_service,
        hasher=hasher,
        token_service=token_service,
        audit_logger=audit_logger,
        logger=logging.getLogger("app.application.auth_service"),
    )


def get_project_service(session: Session, audit_logger: Audit) -> ProjectService:
    return ProjectService(
        repository=ProjectRepository(session),
        audit_logger=audit_logger,
        logger=logging.getLogger("app.application.project_service"),
    )


def get_task_service(session: Session, audit_logger: Audit) -> TaskService:
    return TaskService(
        repository=TaskRepository(session),
        activity_repository=TaskActivityRepository(session),
        audit_logger=audit_logger,
        logger=logging.getLogger("app.application.task_service"),
    )


def get_attendance_service(session: Session, audit_logger: Audit) -> AttendanceService:
    return AttendanceService(
        attendance_repository=AttendanceRepository(session),
        leave_repository=LeaveRequestRepository(session),
        audit_logger=audit_logger,
        logger=logging.getLogger("app.application.attendance_service"),
    )


def get_document_service(session: Session, audit_logger: Audit) -> DocumentService:
    return DocumentService(
        repository=DocumentRepository(session),
        audit_logger=audit_logger,
        logger=logging.getLogger("app.application.document_service"),
    )


def get_material_service(session: Session, audit_logger: Audit) -> MaterialService:
    return MaterialService(
        repository=MaterialRepository(session),
        usage_repository=MaterialUsageRepository(session),
        requisition_repository=MaterialRequisitionRepository(session),
        audit_logger=audit_logger,
        logger=logging.getLogger("app.application.material_service"),
    )


def get_equipment_service(session: Session, audit_logger: Audit) -> EquipmentService:
    return EquipmentService(
        repository=EquipmentRepository(session),
        breakdown_repository=EquipmentBreakdownRepository(session),
        maintenance_repository=EquipmentMaintenanceRepository(session),
        audit_logger=audit_logger,
        logger=logging.getLogger("app.application.equipment_service"),
    )
