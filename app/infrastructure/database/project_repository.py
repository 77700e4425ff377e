"""DB-backed project repository."""

from app.infrastructure.database.models import Project
from app.infrastructure.database.repository import AsyncRepository


class ProjectRepository(AsyncRepository[Project]):
    model = Project

    async def list_all(self) -> list[Project]:
        return await self._list(order_by=(Project.created_at.desc(), Project.id.desc()))
