"""DB-backed material, usage and requisition repositories."""

from typing import Optional

from app.infrastructure.database.models import Material, MaterialRequisition, MaterialUsage
from app.infrastructure.database.repository import AsyncRepository


class MaterialRepository(AsyncRepository[Material]):
    model = Material

    async def list(self, project_id: Optional[int] = None) -> list[Material]:
        criteria = []
        if project_id is not None:
            criteria.append(Material.project_id == project_id)
        return await self._list(*criteria, order_by=(Material.created_at.desc(), Material.id.desc()))

    async def record_usage(self, usage: MaterialUsage) -> Optional[Material]:
        """
        Draw `usage.quantity_used` from the balance and store the usage row in
        one transaction. The decrement is a single conditional UPDATE, so two
        concurrent draws can never take the balance below zero. Returns None,
        with nothing written, if the material is missing or the balance is short.
        """
        material = await self.adjust(
            usage.material_id,
            "current_balance",
            -usage.quantity_used,
            minimum=0,
            commit=False,
        )
        if material is None:
            await self._session.rollback()
            return None
        self._session.add(usage)
        await self._session.commit()
        await self._session.refresh(usage)
        return material


class MaterialUsageRepository(AsyncRepository[MaterialUsage]):
    model = MaterialUsage

    async def list_for_material(self, material_id: int) -> list[MaterialUsage]:
        return await self._list(
            MaterialUsage.material_id == material_id,
            order_by=(MaterialUsage.created_at.desc(), MaterialUsage.id.desc()),
        )


class MaterialRequisitionRepository(AsyncRepository[MaterialRequisition]):
    model = MaterialRequisition

    async def list(
        self,
        status: Optional[str] = None,
        project_id: Optional[int] = None,
    ) -> list[MaterialRequisition]:
        criteria = []
        if status is not None:
            criteria.append(MaterialRequisition.status == status)
        if project_id is not None:
            criteria.append(MaterialRequisition.project_id == project_id)
        return await self._list(
            *criteria,
            order_by=(MaterialRequisition.created_at.desc(), MaterialRequisition.id.desc()),
        )
