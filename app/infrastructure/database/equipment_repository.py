"""DB-backed equipment, breakdown and maintenance repositories."""

from typing import Optional

from app.infrastructure.database.models import Equipment, EquipmentBreakdown, EquipmentMaintenance
from app.infrastructure.database.repository import AsyncRepository


class EquipmentRepository(AsyncRepository[Equipment]):
    model = Equipment

    async def list(
        self,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Equipment]:
        criteria = []
        if project_id is not None:
            criteria.append(Equipment.project_id == project_id)
        if status is not None:
            criteria.append(Equipment.status == status)
        return await self._list(*criteria, order_by=(Equipment.created_at.desc(), Equipment.id.desc()))


class EquipmentBreakdownRepository(AsyncRepository[EquipmentBreakdown]):
    model = EquipmentBreakdown

    async def list_for_equipment(self, equipment_id: int) -> list[EquipmentBreakdown]:
        return await self._list(
            EquipmentBreakdown.equipment_id == equipment_id,
            order_by=(EquipmentBreakdown.created_at.desc(), EquipmentBreakdown.id.desc()),
        )


class EquipmentMaintenanceRepository(AsyncRepository[EquipmentMaintenance]):
    model = EquipmentMaintenance

    async def list_for_equipment(self, equipment_id: int) -> list[EquipmentMaintenance]:
        return await self._list(
            EquipmentMaintenance.equipment_id == equipment_id,
            order_by=(EquipmentMaintenance.created_at.desc(), EquipmentMaintenance.id.desc()),
        )
