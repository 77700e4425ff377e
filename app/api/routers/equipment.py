"""Equipment API router: fleet records, breakdowns, maintenance."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import CurrentIdentity, get_equipment_service
from app.application.equipment_service import EquipmentService
from app.domain.schemas.equipment import (
    BreakdownCreateRequest,
    BreakdownResponse,
    EquipmentCreateRequest,
    EquipmentResponse,
    EquipmentUpdateRequest,
    MaintenanceCreateRequest,
    MaintenanceResponse,
)

router = APIRouter()

EquipmentServiceDep = Annotated[EquipmentService, Depends(get_equipment_service)]


@router.get("", response_model=list[EquipmentResponse])
async def list_equipment(
    identity: CurrentIdentity,
    equipment_service: EquipmentServiceDep,
    project_id: Optional[int] = None,
    status: Optional[str] = None,
):
    return await equipment_service.list_equipment(project_id=project_id, status=status)


@router.post("", response_model=EquipmentResponse, status_code=201)
async def create_equipment(
    body: EquipmentCreateRequest,
    identity: CurrentIdentity,
    equipment_service: EquipmentServiceDep,
):
    return await equipment_service.create_equipment(identity, body)


@router.get("/{equipment_id}", response_model=EquipmentResponse)
async def get_equipment(equipment_id: int, identity: CurrentIdentity, equipment_service: EquipmentServiceDep):
    return await equipment_service.get_equipment(equipment_id)


@router.put("/{equipment_id}", response_model=EquipmentResponse)
async def update_equipment(
    equipment_id: int,
    body: EquipmentUpdateRequest,
    identity: CurrentIdentity,
    equipment_service: EquipmentServiceDep,
):
    return await equipment_service.update_equipment(identity, equipment_id, body)


@router.post("/{equipment_id}/breakdown", response_model=BreakdownResponse, status_code=201)
async def report_breakdown(
    equipment_id: int,
    body: BreakdownCreateRequest,
    identity: CurrentIdentity,
    equipment_service: EquipmentServiceDep,
):
    return await equipment_service.report_breakdown(identity, equipment_id, body)


@router.get("/{equipment_id}/breakdowns", response_model=list[BreakdownResponse])
async def list_breakdowns(equipment_id: int, identity: CurrentIdentity, equipment_service: EquipmentServiceDep):
    return await equipment_service.list_breakdowns(equipment_id)


@router.post("/{equipment_id}/maintenance", response_model=MaintenanceResponse, status_code=201)
async def record_maintenance(
    equipment_id: int,
    body: MaintenanceCreateRequest,
    identity: CurrentIdentity,
    equipment_service: EquipmentServiceDep,
):
    return await equipment_service.record_maintenance(identity, equipment_id, body)


@router.get("/{equipment_id}/maintenance", response_model=list[MaintenanceResponse])
async def list_maintenance(equipment_id: int, identity: CurrentIdentity, equipment_service: EquipmentServiceDep):
    return await equipment_service.list_maintenance(equipment_id)
