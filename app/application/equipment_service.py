"""Equipment application service: fleet records, breakdown reports, maintenance history."""

import logging
from datetime import datetime, timezone
from typing import Optional

from app.domain.exceptions import NotFoundError
from app.domain.schemas.equipment import (
    BreakdownCreateRequest,
    BreakdownResponse,
    EquipmentCreateRequest,
    EquipmentResponse,
    EquipmentUpdateRequest,
    MaintenanceCreateRequest,
    MaintenanceResponse,
)
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType
from app.infrastructure.database.equipment_repository import (
    EquipmentBreakdownRepository,
    EquipmentMaintenanceRepository,
    EquipmentRepository,
)
from app.infrastructure.database.models import Equipment, EquipmentBreakdown, EquipmentMaintenance
from app.security.rbac import IdentityContext

EQUIPMENT_NOT_FOUND_MESSAGE = "Equipment not found"


class EquipmentService:
    def __init__(
        self,
        repository: EquipmentRepository,
        breakdown_repository: EquipmentBreakdownRepository,
        maintenance_repository: EquipmentMaintenanceRepository,
        audit_logger: AuditLogger,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._breakdowns = breakdown_repository
        self._maintenance = maintenance_repository
        self._audit = audit_logger
        self._logger = logger

    async def list_equipment(
        self,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[EquipmentResponse]:
        equipment = await self._repository.list(project_id=project_id, status=status)
        return [EquipmentResponse.model_validate(e) for e in equipment]

    async def get_equipment(self, equipment_id: int) -> EquipmentResponse:
        return EquipmentResponse.model_validate(await self._require(equipment_id))

    async def create_equipment(self, identity: IdentityContext, request: EquipmentCreateRequest) -> EquipmentResponse:
        equipment = await self._repository.create(Equipment(**request.model_dump()))
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.EQUIPMENT,
            entity_id=equipment.id,
            changes={"name": equipment.name, "type": equipment.type},
        )
        return EquipmentResponse.model_validate(equipment)

    async def update_equipment(
        self,
        identity: IdentityContext,
        equipment_id: int,
        request: EquipmentUpdateRequest,
    ) -> EquipmentResponse:
        equipment = await self._repository.update_fields(equipment_id, request.model_dump(exclude_none=True))
        if equipment is None:
            raise NotFoundError(EQUIPMENT_NOT_FOUND_MESSAGE)
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.EQUIPMENT,
            entity_id=equipment_id,
            changes=request.model_dump(mode="json", exclude_unset=True),
        )
        return EquipmentResponse.model_validate(equipment)

    async def report_breakdown(
        self,
        identity: IdentityContext,
        equipment_id: int,
        request: BreakdownCreateRequest,
    ) -> BreakdownResponse:
        """The equipment is marked broken until maintenance is recorded."""
        if await self._repository.update_fields(equipment_id, {"status": "broken"}) is None:
            raise NotFoundError(EQUIPMENT_NOT_FOUND_MESSAGE)

        breakdown = await self._breakdowns.create(
            EquipmentBreakdown(
                equipment_id=equipment_id,
                reported_by=identity.id,
                status="reported",
                **request.model_dump(),
            )
        )
        self._logger.info(
            "equipment_breakdown_reported",
            extra={"equipment_id": equipment_id, "severity": request.severity},
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.EQUIPMENT_BREAKDOWN,
            entity_id=breakdown.id,
            changes={"equipment_id": equipment_id, "severity": request.severity},
        )
        return BreakdownResponse.model_validate(breakdown)

    async def record_maintenance(
        self,
        identity: IdentityContext,
        equipment_id: int,
        request: MaintenanceCreateRequest,
    ) -> MaintenanceResponse:
        """Maintenance returns the equipment to service and stamps today as its last service date."""
        await self._require(equipment_id)
        maintenance = await self._maintenance.create(
            EquipmentMaintenance(equipment_id=equipment_id, performed_by=identity.id, **request.model_dump())
        )

        values = {
            "status": "available",
            "last_maintenance_date": datetime.now(timezone.utc).date(),
        }
        if request.next_maintenance_date is not None:
            values["next_maintenance_date"] = request.next_maintenance_date
        await self._repository.update_fields(equipment_id, values)

        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.EQUIPMENT_MAINTENANCE,
            entity_id=maintenance.id,
            changes={"equipment_id": equipment_id, "maintenance_type": request.maintenance_type},
        )
        return MaintenanceResponse.model_validate(maintenance)

    async def list_breakdowns(self, equipment_id: int) -> list[BreakdownResponse]:
        breakdowns = await self._breakdowns.list_for_equipment(equipment_id)
        return [BreakdownResponse.model_validate(b) for b in breakdowns]

    async def list_maintenance(self, equipment_id: int) -> list[MaintenanceResponse]:
        records = await self._maintenance.list_for_equipment(equipment_id)
        return [MaintenanceResponse.model_validate(m) for m in records]

    async def _require(self, equipment_id: int) -> Equipment:
        equipment = await self._repository.get_by_id(equipment_id)
        if equipment is None:
            raise NotFoundError(EQUIPMENT_NOT_FOUND_MESSAGE)
        return equipment
