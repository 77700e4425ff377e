"""Audit repository protocol. Governance layer depends on this; infrastructure implements it."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Protocol

from app.governance.audit_models import AuditEntityType, AuditRecord


@dataclass(frozen=True)
class AuditQuery:
    """Filters for the audit listing. Dates are inclusive calendar days on created_at."""

    entity_type: Optional[AuditEntityType] = None
    entity_id: Optional[int] = None
    user_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class StoredAuditRecord:
    """An audit row as read back, joined with the actor's name."""

    id: int
    user_id: Optional[int]
    action: str
    entity_type: str
    entity_id: Optional[int]
    changes: Optional[Dict[str, Any]]
    created_at: datetime
    username: Optional[str] = None
    full_name: Optional[str] = None


class AuditRepository(Protocol):
    """Protocol for persisting and listing immutable audit records."""

    async def save(self, record: AuditRecord) -> None:
        """Persist an immutable audit record. Must not allow mutation."""
        ...

    async def list(self, query: AuditQuery, limit: int) -> List[StoredAuditRecord]:
        """Return matching records, newest first, at most `limit` rows."""
        ...
