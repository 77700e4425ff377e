"""Immutable audit record model and its fixed vocabularies. Domain-level immutability."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    ACTIVATE = "ACTIVATE"
    DEACTIVATE = "DEACTIVATE"


class AuditEntityType(str, Enum):
    AUTH = "AUTH"
    USER = "USER"
    PROJECT = "PROJECT"
    TASK = "TASK"
    TASK_ACTIVITY = "TASK_ACTIVITY"
    ATTENDANCE = "ATTENDANCE"
    LEAVE_REQUEST = "LEAVE_REQUEST"
    DOCUMENT = "DOCUMENT"
    MATERIAL = "MATERIAL"
    MATERIAL_USAGE = "MATERIAL_USAGE"
    MATERIAL_REQUISITION = "MATERIAL_REQUISITION"
    EQUIPMENT = "EQUIPMENT"
    EQUIPMENT_BREAKDOWN = "EQUIPMENT_BREAKDOWN"
    EQUIPMENT_MAINTENANCE = "EQUIPMENT_MAINTENANCE"


@dataclass(frozen=True)
class AuditRecord:
    """
    Immutable audit record: who (user_id) did what (action) to which entity, and when (UTC).
    """

    user_id: Optional[int]
    action: AuditAction
    entity_type: AuditEntityType
    entity_id: Optional[int]
    changes: Optional[Dict[str, Any]]
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging."""
        return {
            "user_id": self.user_id,
            "action": self.action.value,
            "entity_type": self.entity_type.value,
            "entity_id": self.entity_id,
            "changes": self.changes,
            "created_at": self.created_at.isoformat(),
        }
