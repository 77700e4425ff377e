"""DB-backed audit repository. Implements the AuditRepository protocol on the audit_logs table."""

from datetime import datetime, time, timedelta, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.governance.audit_models import AuditRecord
from app.governance.audit_repository import AuditQuery, StoredAuditRecord
from app.governance.exceptions import AuditWriteError
from app.infrastructure.database.models import AuditLog, User


class DbAuditRepository:
    """
    Opens its own session per call, so audit writes commit (or fail)
    independently of whatever business transaction triggered them.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, record: AuditRecord) -> None:
        """Insert one row. Raises AuditWriteError on any database failure."""
        row = AuditLog(
            user_id=record.user_id,
            action=record.action.value,
            entity_type=record.entity_type.value,
            entity_id=record.entity_id,
            changes=record.changes,
            created_at=record.created_at,
        )
        try:
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
        except SQLAlchemyError as e:
            raise AuditWriteError(f"Audit insert failed: {e}") from e

    async def list(self, query: AuditQuery, limit: int) -> List[StoredAuditRecord]:
        stmt = select(AuditLog, User.username, User.full_name).outerjoin(
            User, AuditLog.user_id == User.id
        )
        if query.entity_type is not None:
            stmt = stmt.where(AuditLog.entity_type == query.entity_type.value)
        if query.entity_id is not None:
            stmt = stmt.where(AuditLog.entity_id == query.entity_id)
        if query.user_id is not None:
            stmt = stmt.where(AuditLog.user_id == query.user_id)
        if query.start_date is not None:
            stmt = stmt.where(AuditLog.created_at >= datetime.combine(query.start_date, time.min, tzinfo=timezone.utc))
        if query.end_date is not None:
            next_day = query.end_date + timedelta(days=1)
            stmt = stmt.where(AuditLog.created_at < datetime.combine(next_day, time.min, tzinfo=timezone.utc))
        stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit)

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.all()

        return [
            StoredAuditRecord(
                id=log.id,
                user_id=log.user_id,
                action=log.action,
                entity_type=log.entity_type,
                entity_id=log.entity_id,
                changes=log.changes,
                created_at=log.created_at,
                username=username,
                full_name=full_name,
            )
            for log, username, full_name in rows
        ]
