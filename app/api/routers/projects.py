"""Projects API router."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies import CurrentIdentity, get_project_service, require_roles
from app.application.project_service import ProjectService
from app.domain.schemas.project import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest
from app.security import policies
from app.security.rbac import IdentityContext

router = APIRouter()

ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]


@router.get("", response_model=list[ProjectResponse])
async def list_projects(identity: CurrentIdentity, project_service: ProjectServiceDep):
    return await project_service.list_projects()


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: int, identity: CurrentIdentity, project_service: ProjectServiceDep):
    return await project_service.get_project(project_id)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreateRequest,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.CREATE_PROJECT))],
    project_service: ProjectServiceDep,
):
    return await project_service.create_project(identity, body)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    body: ProjectUpdateRequest,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.UPDATE_PROJECT))],
    project_service: ProjectServiceDep,
):
    return await project_service.update_project(identity, project_id, body)
