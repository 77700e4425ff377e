"""Project application service."""

import logging

from app.domain.exceptions import NotFoundError
from app.domain.schemas.project import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType
from app.infrastructure.database.models import Project
from app.infrastructure.database.project_repository import ProjectRepository
from app.security.rbac import IdentityContext

PROJECT_NOT_FOUND_MESSAGE = "Project not found"


class ProjectService:
    def __init__(
        self,
        repository: ProjectRepository,
        audit_logger: AuditLogger,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._audit = audit_logger
        self._logger = logger

    async def list_projects(self) -> list[ProjectResponse]:
        return [ProjectResponse.model_validate(p) for p in await self._repository.list_all()]

    async def get_project(self, project_id: int) -> ProjectResponse:
        project = await self._repository.get_by_id(project_id)
        if project is None:
            raise NotFoundError(PROJECT_NOT_FOUND_MESSAGE)
        return ProjectResponse.model_validate(project)

    async def create_project(
        self,
        identity: IdentityContext,
        request: ProjectCreateRequest,
    ) -> ProjectResponse:
        project = await self._repository.create(
            Project(**request.model_dump(), created_by=identity.id)
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.PROJECT,
            entity_id=project.id,
            changes={"name": project.name, "location": project.location},
        )
        return ProjectResponse.model_validate(project)

    async def update_project(
        self,
        identity: IdentityContext,
        project_id: int,
        request: ProjectUpdateRequest,
    ) -> ProjectResponse:
        project = await self._repository.update_fields(project_id, request.model_dump(exclude_none=True))
        if project is None:
            raise NotFoundError(PROJECT_NOT_FOUND_MESSAGE)
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.PROJECT,
            entity_id=project_id,
            changes=request.model_dump(mode="json", exclude_unset=True),
        )
        return ProjectResponse.model_validate(project)
