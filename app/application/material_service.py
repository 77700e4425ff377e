"""Material stock application service: inventory records, usage draws, requisitions."""

import logging
from datetime import datetime, timezone
from typing import Optional

from app.domain.exceptions import InvalidStateError, NotFoundError
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
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType
from app.infrastructure.database.material_repository import (
    MaterialRepository,
    MaterialRequisitionRepository,
    MaterialUsageRepository,
)
from app.infrastructure.database.models import Material, MaterialRequisition, MaterialUsage
from app.security.rbac import IdentityContext

MATERIAL_NOT_FOUND_MESSAGE = "Material not found"
REQUISITION_NOT_FOUND_MESSAGE = "Requisition not found"


class MaterialService:
    """
    The stored balance is only changed by statements that compute the new
    value in the database (usage draws and approved requisitions), never by
    writing back a value read earlier.
    """

    def __init__(
        self,
        repository: MaterialRepository,
        usage_repository: MaterialUsageRepository,
        requisition_repository: MaterialRequisitionRepository,
        audit_logger: AuditLogger,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._usage = usage_repository
        self._requisitions = requisition_repository
        self._audit = audit_logger
        self._logger = logger

    async def list_materials(self, project_id: Optional[int] = None) -> list[MaterialResponse]:
        materials = await self._repository.list(project_id=project_id)
        return [MaterialResponse.model_validate(m) for m in materials]

    async def get_material(self, material_id: int) -> MaterialResponse:
        return MaterialResponse.model_validate(await self._require(material_id))

    async def create_material(self, identity: IdentityContext, request: MaterialCreateRequest) -> MaterialResponse:
        material = await self._repository.create(
            Material(**request.model_dump(), current_balance=request.quantity)
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.MATERIAL,
            entity_id=material.id,
            changes={"name": material.name, "quantity": material.quantity},
        )
        return MaterialResponse.model_validate(material)

    async def update_material(
        self,
        identity: IdentityContext,
        material_id: int,
        request: MaterialUpdateRequest,
    ) -> MaterialResponse:
        material = await self._repository.update_fields(material_id, request.model_dump(exclude_none=True))
        if material is None:
            raise NotFoundError(MATERIAL_NOT_FOUND_MESSAGE)
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.MATERIAL,
            entity_id=material_id,
            changes=request.model_dump(mode="json", exclude_unset=True),
        )
        return MaterialResponse.model_validate(material)

    async def record_usage(
        self,
        identity: IdentityContext,
        material_id: int,
        request: MaterialUsageCreateRequest,
    ) -> MaterialUsageResponse:
        usage = MaterialUsage(
            material_id=material_id,
            user_id=identity.id,
            quantity_used=request.quantity_used,
            notes=request.notes,
        )
        material = await self._repository.record_usage(usage)
        if material is None:
            await self._require(material_id)
            raise InvalidStateError("Insufficient material balance")

        self._logger.info(
            "material_used",
            extra={"material_id": material_id, "quantity_used": request.quantity_used},
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.MATERIAL_USAGE,
            entity_id=material_id,
            changes={"quantity_used": request.quantity_used, "new_balance": material.current_balance},
        )
        return MaterialUsageResponse.model_validate(usage)

    async def list_usage(self, material_id: int) -> list[MaterialUsageResponse]:
        usage = await self._usage.list_for_material(material_id)
        return [MaterialUsageResponse.model_validate(u) for u in usage]

    async def create_requisition(
        self,
        identity: IdentityContext,
        request: RequisitionCreateRequest,
    ) -> RequisitionResponse:
        await self._require(request.material_id)
        requisition = await self._requisitions.create(
            MaterialRequisition(requested_by=identity.id, status="pending", **request.model_dump())
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.MATERIAL_REQUISITION,
            entity_id=requisition.id,
            changes={"material_id": request.material_id, "quantity_requested": request.quantity_requested},
        )
        return RequisitionResponse.model_validate(requisition)

    async def list_requisitions(
        self,
        status: Optional[str] = None,
        project_id: Optional[int] = None,
    ) -> list[RequisitionResponse]:
        requisitions = await self._requisitions.list(status=status, project_id=project_id)
        return [RequisitionResponse.model_validate(r) for r in requisitions]

    async def review_requisition(
        self,
        identity: IdentityContext,
        requisition_id: int,
        request: RequisitionReviewRequest,
    ) -> RequisitionResponse:
        """An approval with a quantity credits that quantity to the material's balance."""
        requisition = await self._requisitions.get_by_id(requisition_id)
        if requisition is None:
            raise NotFoundError(REQUISITION_NOT_FOUND_MESSAGE)
        if requisition.status != "pending":
            raise InvalidStateError("Requisition already reviewed")

        values = {
            "status": request.status,
            "approved_by": identity.id,
            "approved_at": datetime.now(timezone.utc),
        }
        if request.approved_quantity is not None:
            values["approved_quantity"] = request.approved_quantity
        requisition = await self._requisitions.update_fields(requisition_id, values)
        if requisition is None:
            raise NotFoundError(REQUISITION_NOT_FOUND_MESSAGE)

        if request.status == "approved" and request.approved_quantity is not None:
            await self._repository.adjust(requisition.material_id, "current_balance", request.approved_quantity)

        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.MATERIAL_REQUISITION,
            entity_id=requisition_id,
            changes=request.model_dump(mode="json", exclude_none=True),
        )
        return RequisitionResponse.model_validate(requisition)

    async def _require(self, material_id: int) -> Material:
        material = await self._repository.get_by_id(material_id)
        if material is None:
            raise NotFoundError(MATERIAL_NOT_FOUND_MESSAGE)
        return material
