"""Audit API router: GET /audit (admin/manager, newest first, capped)."""

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_audit_logger, require_roles
from app.domain.schemas.audit import AuditLogResponse
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditEntityType
from app.governance.audit_repository import AuditQuery
from app.security import policies
from app.security.rbac import IdentityContext

router = APIRouter()


@router.get("", response_model=list[AuditLogResponse])
async def list_audit_logs(
    identity: Annotated[IdentityContext, Depends(require_roles(policies.LIST_AUDIT_LOGS))],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
    entity_type: Optional[AuditEntityType] = None,
    entity_id: Optional[int] = None,
    user_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
):
    """No pagination past the cap: narrow the filters instead."""
    records = await audit_logger.list_records(
        AuditQuery(
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
        )
    )
    return [AuditLogResponse.from_record(r) for r in records]
