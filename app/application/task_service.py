"""Task application service. Workers may only change tasks assigned to them."""

import logging
from typing import Optional

from app.domain.exceptions import NotFoundError
from app.domain.schemas.task import (
    TaskActivityCreateRequest,
    TaskActivityResponse,
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
)
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType
from app.infrastructure.database.models import Task, TaskActivity
from app.infrastructure.database.task_repository import TaskActivityRepository, TaskRepository
from app.security.ownership import TASK_OWNERSHIP
from app.security.rbac import IdentityContext

TASK_NOT_FOUND_MESSAGE = "Task not found"


class TaskService:
    def __init__(
        self,
        repository: TaskRepository,
        activity_repository: TaskActivityRepository,
        audit_logger: AuditLogger,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._activities = activity_repository
        self._audit = audit_logger
        self._logger = logger

    async def list_tasks(
        self,
        project_id: Optional[int] = None,
        assigned_to: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[TaskResponse]:
        tasks = await self._repository.list(project_id=project_id, assigned_to=assigned_to, status=status)
        return [TaskResponse.model_validate(t) for t in tasks]

    async def get_task(self, task_id: int) -> TaskResponse:
        return TaskResponse.model_validate(await self._require(task_id))

    async def create_task(self, identity: IdentityContext, request: TaskCreateRequest) -> TaskResponse:
        task = await self._repository.create(Task(**request.model_dump(), created_by=identity.id))
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.TASK,
            entity_id=task.id,
            changes={"title": task.title, "project_id": task.project_id},
        )
        return TaskResponse.model_validate(task)

    async def update_task(
        self,
        identity: IdentityContext,
        task_id: int,
        request: TaskUpdateRequest,
    ) -> TaskResponse:
        """Ownership is judged on the stored assignee, before any change is applied."""
        task = await self._require(task_id)
        TASK_OWNERSHIP.check(identity, task.assigned_to)

        updated = await self._repository.update_fields(task_id, request.model_dump(exclude_none=True))
        if updated is None:
            raise NotFoundError(TASK_NOT_FOUND_MESSAGE)

        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.TASK,
            entity_id=task_id,
            changes=request.model_dump(mode="json", exclude_unset=True),
        )
        return TaskResponse.model_validate(updated)

    async def log_activity(
        self,
        identity: IdentityContext,
        task_id: int,
        request: TaskActivityCreateRequest,
    ) -> TaskActivityResponse:
        await self._require(task_id)
        activity = await self._activities.create(
            TaskActivity(task_id=task_id, user_id=identity.id, **request.model_dump())
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.TASK_ACTIVITY,
            entity_id=activity.id,
            changes={"task_id": task_id, "activity_type": activity.activity_type},
        )
        return TaskActivityResponse.model_validate(activity)

    async def list_activities(self, task_id: int) -> list[TaskActivityResponse]:
        activities = await self._activities.list_for_task(task_id)
        return [TaskActivityResponse.model_validate(a) for a in activities]

    async def _require(self, task_id: int) -> Task:
        task = await self._repository.get_by_id(task_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
        return task
