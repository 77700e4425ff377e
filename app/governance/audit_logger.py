"""Best-effort, fire-and-forget audit trail. No FastAPI."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set

from app.governance.audit_models import AuditAction, AuditEntityType, AuditRecord
from app.governance.audit_repository import AuditQuery, AuditRepository, StoredAuditRecord


class AuditLogger:
    """
    Writes immutable audit records via repository.

    record() schedules the write on a background task and returns at once:
    the caller's response never waits on it, and a failed write is logged
    and dropped. Business-operation success is authoritative; audit
    completeness is best-effort.
    """

    def __init__(
        self,
        repository: AuditRepository,
        logger: Optional[logging.Logger] = None,
        list_limit: int = 500,
    ) -> None:
        self._repository = repository
        self._logger = logger or logging.getLogger(__name__)
        self._list_limit = list_limit
        self._pending: Set[asyncio.Task] = set()

    def record(
        self,
        *,
        user_id: Optional[int],
        action: AuditAction,
        entity_type: AuditEntityType,
        entity_id: Optional[int],
        changes: Optional[Dict[str, Any]] = None,
    ) -> AuditRecord:
        """Build the record with a UTC timestamp and hand it off. Must be called from a running loop."""
        record = AuditRecord(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            changes=changes,
            created_at=datetime.now(timezone.utc),
        )
        task = asyncio.get_running_loop().create_task(self._write(record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return record

    async def _write(self, record: AuditRecord) -> None:
        try:
            await self._repository.save(record)
        except Exception as e:
            self._logger.error(
                "audit_write_failed",
                extra={"audit_record": record.to_dict(), "error": str(e)},
            )
            return
        self._logger.debug("audit_written", extra={"audit_record": record.to_dict()})

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every scheduled write to finish. Used at shutdown."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
            self._pending.difference_update([t for t in self._pending if t.done()])

    async def list_records(self, query: AuditQuery) -> List[StoredAuditRecord]:
        """Newest first, capped at the configured limit. Narrow the filters to see more."""
        return await self._repository.list(query, self._list_limit)
