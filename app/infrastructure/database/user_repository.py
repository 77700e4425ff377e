"""DB-backed user repository. Users are deactivated, never deleted."""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError

from app.domain.exceptions import DuplicateIdentityError
from app.infrastructure.database.models import User
from app.infrastructure.database.repository import AsyncRepository

DUPLICATE_IDENTITY_MESSAGE = "Username or email already exists"


class UserRepository(AsyncRepository[User]):
    model = User

    async def get_by_username(self, username: str) -> Optional[User]:
        """Exact, case-sensitive match."""
        result = await self._session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def exists_with_username_or_email(self, username: str, email: str) -> bool:
        stmt = select(User.id).where(or_(User.username == username, User.email == email)).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[User]:
        return await self._list(order_by=(User.created_at.desc(), User.id.desc()))

    async def create(self, obj: User) -> User:
        """Unique constraints back up the pre-insert check when two registrations race."""
        try:
            return await super().create(obj)
        except IntegrityError as e:
            await self._session.rollback()
            raise DuplicateIdentityError(DUPLICATE_IDENTITY_MESSAGE) from e

    async def update_fields(self, id: int, values: dict) -> Optional[User]:
        try:
            return await super().update_fields(id, values)
        except IntegrityError as e:
            await self._session.rollback()
            raise DuplicateIdentityError(DUPLICATE_IDENTITY_MESSAGE) from e

    async def set_active(self, id: int, active: bool) -> Optional[User]:
        return await self.update_fields(id, {"is_active": active})
