# app/infrastructure/database/repository.py

from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class AsyncRepository(Generic[T]):
    """Session-scoped CRUD over one ORM model. Each write commits."""

    model: ClassVar[Type[Any]]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, id: int) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, obj: T) -> T:
        self._session.add(obj)
        await self._session.commit()
        await self._session.refresh(obj)
        return obj

    async def update_fields(self, id: int, values: dict) -> Optional[T]:
        """
        Apply `values` in one UPDATE ... RETURNING statement. Columns absent
        from `values` keep their stored value. Returns None if no row matched.
        """
        return await self._update_returning([self.model.id == id], values)

    async def adjust(
        self,
        id: int,
        column: str,
        delta: float,
        minimum: Optional[float] = None,
        commit: bool = True,
    ) -> Optional[T]:
        """
        Add `delta` to a numeric column in the database (`SET col = col + delta`).
        With `minimum`, rows whose result would drop below it are left alone.
        Returns None if no row matched either condition.
        """
        target = getattr(self.model, column)
        criteria = [self.model.id == id]
        if minimum is not None:
            criteria.append(target + delta >= minimum)
        return await self._update_returning(criteria, {column: target + delta}, commit=commit)

    async def _update_returning(self, criteria: list, values: dict, commit: bool = True) -> Optional[T]:
        if "updated_at" in self.model.__table__.c:
            values = {**values, "updated_at": datetime.now(timezone.utc)}
        stmt = (
            update(self.model)
            .where(*criteria)
            .values(**values)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        obj = result.scalar_one_or_none()
        if commit:
            await self._session.commit()
        return obj

    async def delete(self, id: int) -> bool:
        result = await self._session.execute(delete(self.model).where(self.model.id == id))
        await self._session.commit()
        return result.rowcount > 0

    async def _list(self, *criteria, order_by: Sequence = ()) -> list[T]:
        stmt = select(self.model).where(*criteria)
        if order_by:
            stmt = stmt.order_by(*order_by)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
