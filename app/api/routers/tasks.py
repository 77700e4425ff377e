"""Tasks API router. Creation needs a site-lead role; updates are assignee-scoped for workers."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import CurrentIdentity, get_task_service, require_roles
from app.application.task_service import TaskService
from app.domain.schemas.task import (
    TaskActivityCreateRequest,
    TaskActivityResponse,
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
)
from app.security import policies
from app.security.rbac import IdentityContext

router = APIRouter()

TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    identity: CurrentIdentity,
    task_service: TaskServiceDep,
    project_id: Optional[int] = None,
    assigned_to: Optional[int] = None,
    status: Optional[str] = None,
):
    return await task_service.list_tasks(project_id=project_id, assigned_to=assigned_to, status=status)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, identity: CurrentIdentity, task_service: TaskServiceDep):
    return await task_service.get_task(task_id)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreateRequest,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.CREATE_TASK))],
    task_service: TaskServiceDep,
):
    return await task_service.create_task(identity, body)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    body: TaskUpdateRequest,
    identity: CurrentIdentity,
    task_service: TaskServiceDep,
):
    return await task_service.update_task(identity, task_id, body)


@router.post("/{task_id}/activity", response_model=TaskActivityResponse, status_code=201)
async def log_activity(
    task_id: int,
    body: TaskActivityCreateRequest,
    identity: CurrentIdentity,
    task_service: TaskServiceDep,
):
    return await task_service.log_activity(identity, task_id, body)


@router.get("/{task_id}/activities", response_model=list[TaskActivityResponse])
async def list_activities(task_id: int, identity: CurrentIdentity, task_service: TaskServiceDep):
    return await task_service.list_activities(task_id)
