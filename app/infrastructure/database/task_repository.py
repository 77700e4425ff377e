"""DB-backed task and task-activity repositories."""

from typing import Optional

from app.infrastructure.database.models import Task, TaskActivity
from app.infrastructure.database.repository import AsyncRepository


class TaskRepository(AsyncRepository[Task]):
    model = Task

    async def list(
        self,
        project_id: Optional[int] = None,
        assigned_to: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Task]:
        criteria = []
        if project_id is not None:
            criteria.append(Task.project_id == project_id)
        if assigned_to is not None:
            criteria.append(Task.assigned_to == assigned_to)
        if status is not None:
            criteria.append(Task.status == status)
        return await self._list(*criteria, order_by=(Task.created_at.desc(), Task.id.desc()))


class TaskActivityRepository(AsyncRepository[TaskActivity]):
    model = TaskActivity

    async def list_for_task(self, task_id: int) -> list[TaskActivity]:
        return await self._list(
            TaskActivity.task_id == task_id,
            order_by=(TaskActivity.created_at.desc(), TaskActivity.id.desc()),
        )
