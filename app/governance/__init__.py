"""Governance: immutable audit trail. No FastAPI."""

from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType, AuditRecord
from app.governance.audit_repository import AuditQuery, AuditRepository, StoredAuditRecord

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "AuditLogger",
    "AuditQuery",
    "AuditRecord",
    "AuditRepository",
    "StoredAuditRecord",
]
