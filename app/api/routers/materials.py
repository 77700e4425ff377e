"""Materials API router: stock records, usage draws, requisitions."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import CurrentIdentity, get_material_service, require_roles
from app.application.material_service import MaterialService
from app.domain.schemas.material import (
    MaterialCreateRequest,
    MaterialResponse,
    MaterialUpdateRequest,
    MaterialUsageCreateRequest,
    MaterialUsageResponse,
    RequisitionCreateRequest,
    RequisitionResponse,
    RequisitionReviewRequest,
)
from app.security import policies
from app.security.rbac import IdentityContext

router = APIRouter()

MaterialServiceDep = Annotated[MaterialService, Depends(get_material_service)]


@router.get("", response_model=list[MaterialResponse])
async def list_materials(
    identity: CurrentIdentity,
    material_service: MaterialServiceDep,
    project_id: Optional[int] = None,
):
    return await material_service.list_materials(project_id=project_id)


@router.post("", response_model=MaterialResponse, status_code=201)
async def create_material(
    body: MaterialCreateRequest,
    identity: CurrentIdentity,
    material_service: MaterialServiceDep,
):
    return await material_service.create_material(identity, body)


# Requisition routes come before /{material_id} so the literal segment wins.
@router.post("/requisitions", response_model=RequisitionResponse, status_code=201)
async def create_requisition(
    body: RequisitionCreateRequest,
    identity: CurrentIdentity,
    material_service: MaterialServiceDep,
):
    return await material_service.create_requisition(identity, body)


@router.get("/requisitions", response_model=list[RequisitionResponse])
async def list_requisitions(
    identity: CurrentIdentity,
    material_service: MaterialServiceDep,
    status: Optional[str] = None,
    project_id: Optional[int] = None,
):
    return await material_service.list_requisitions(status=status, project_id=project_id)


@router.patch("/requisitions/{requisition_id}", response_model=RequisitionResponse)
async def review_requisition(
    requisition_id: int,
    body: RequisitionReviewRequest,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.REVIEW_REQUISITION))],
    material_service: MaterialServiceDep,
):
    return await material_service.review_requisition(identity, requisition_id, body)


@router.get("/{material_id}", response_model=MaterialResponse)
async def get_material(material_id: int, identity: CurrentIdentity, material_service: MaterialServiceDep):
    return await material_service.get_material(material_id)


@router.put("/{material_id}", response_model=MaterialResponse)
async def update_material(
    material_id: int,
    body: MaterialUpdateRequest,
    identity: CurrentIdentity,
    material_service: MaterialServiceDep,
):
    return await material_service.update_material(identity, material_id, body)


@router.post("/{material_id}/usage", response_model=MaterialUsageResponse, status_code=201)
async def record_usage(
    material_id: int,
    body: MaterialUsageCreateRequest,
    identity: CurrentIdentity,
    material_service: MaterialServiceDep,
):
    """Rejected with 400 when the balance cannot cover the draw."""
    return await material_service.record_usage(identity, material_id, body)


@router.get("/{material_id}/usage", response_model=list[MaterialUsageResponse])
async def list_usage(material_id: int, identity: CurrentIdentity, material_service: MaterialServiceDep):
    return await material_service.list_usage(material_id)
