"""Pydantic schema for audit listing rows."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from app.governance.audit_repository import StoredAuditRecord


class AuditLogResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    action: str
    entity_type: str
    entity_id: Optional[int] = None
    changes: Optional[Dict[str, Any]] = None
    created_at: datetime
    username: Optional[str] = None
    full_name: Optional[str] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_record(cls, record: StoredAuditRecord) -> "AuditLogResponse":
        return cls.model_validate(record)
