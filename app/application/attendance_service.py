"""Attendance and leave-request application service."""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from app.domain.exceptions import InvalidStateError, NotFoundError
from app.domain.schemas.attendance import (
    AttendanceMarkRequest,
    AttendanceResponse,
    AttendanceUpdateRequest,
    ClockInRequest,
    LeaveRequestCreateRequest,
    LeaveRequestResponse,
    LeaveReviewRequest,
)
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType
from app.infrastructure.database.attendance_repository import (
    AttendanceRepository,
    LeaveRequestRepository,
)
from app.infrastructure.database.models import Attendance, LeaveRequest
from app.security.ownership import LEAVE_REQUEST_OWNERSHIP
from app.security.rbac import IdentityContext


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive; they were written as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AttendanceService:
    """
    Clock-in/clock-out for the caller, supervisor-entered attendance, and
    leave requests. "Today" is the UTC calendar day.
    """

    def __init__(
        self,
        attendance_repository: AttendanceRepository,
        leave_repository: LeaveRequestRepository,
        audit_logger: AuditLogger,
        logger: logging.Logger,
    ) -> None:
        self._attendance = attendance_repository
        self._leave = leave_repository
        self._audit = audit_logger
        self._logger = logger

    async def list_attendance(
        self,
        user_id: Optional[int] = None,
        project_id: Optional[int] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[AttendanceResponse]:
        records = await self._attendance.list(
            user_id=user_id,
            project_id=project_id,
            on_date=on_date,
            start_date=start_date,
            end_date=end_date,
        )
        return [AttendanceResponse.model_validate(r) for r in records]

    async def clock_in(self, identity: IdentityContext, request: ClockInRequest) -> AttendanceResponse:
        now = datetime.now(timezone.utc)
        if await self._attendance.find_open(identity.id, now.date()) is not None:
            raise InvalidStateError("Already clocked in today")

        record = await self._attendance.create(
            Attendance(
                user_id=identity.id,
                project_id=request.project_id,
                attendance_date=now.date(),
                clock_in_time=now,
                status="present",
                notes=request.notes,
            )
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.ATTENDANCE,
            entity_id=record.id,
            changes={"action": "clock_in", "project_id": request.project_id},
        )
        return AttendanceResponse.model_validate(record)

    async def clock_out(self, identity: IdentityContext) -> AttendanceResponse:
        now = datetime.now(timezone.utc)
        open_record = await self._attendance.find_open(identity.id, now.date())
        if open_record is None:
            raise InvalidStateError("No active clock-in found")

        hours_worked = 0.0
        if open_record.clock_in_time is not None:
            elapsed = now - _as_utc(open_record.clock_in_time)
            hours_worked = round(elapsed.total_seconds() / 3600, 2)

        record = await self._attendance.update_fields(
            open_record.id,
            {"clock_out_time": now, "hours_worked": hours_worked},
        )
        if record is None:
            raise NotFoundError("Attendance record not found")

        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.ATTENDANCE,
            entity_id=record.id,
            changes={"action": "clock_out", "hours_worked": hours_worked},
        )
        return AttendanceResponse.model_validate(record)

    async def mark_attendance(
        self,
        identity: IdentityContext,
        request: AttendanceMarkRequest,
    ) -> AttendanceResponse:
        record = await self._attendance.create(Attendance(**request.model_dump()))
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.ATTENDANCE,
            entity_id=record.id,
            changes={"user_id": request.user_id, "status": request.status},
        )
        return AttendanceResponse.model_validate(record)

    async def update_attendance(
        self,
        identity: IdentityContext,
        attendance_id: int,
        request: AttendanceUpdateRequest,
    ) -> AttendanceResponse:
        record = await self._attendance.update_fields(attendance_id, request.model_dump(exclude_none=True))
        if record is None:
            raise NotFoundError("Attendance record not found")
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.ATTENDANCE,
            entity_id=attendance_id,
            changes=request.model_dump(mode="json", exclude_unset=True),
        )
        return AttendanceResponse.model_validate(record)

    async def create_leave_request(
        self,
        identity: IdentityContext,
        request: LeaveRequestCreateRequest,
    ) -> LeaveRequestResponse:
        leave = await self._leave.create(
            LeaveRequest(user_id=identity.id, status="pending", **request.model_dump())
        )
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.LEAVE_REQUEST,
            entity_id=leave.id,
            changes={
                "start_date": request.start_date.isoformat(),
                "end_date": request.end_date.isoformat(),
                "leave_type": request.leave_type,
            },
        )
        return LeaveRequestResponse.model_validate(leave)

    async def list_leave_requests(
        self,
        identity: IdentityContext,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[LeaveRequestResponse]:
        """Workers who name no user see only their own requests."""
        owner_filter = LEAVE_REQUEST_OWNERSHIP.default_owner_filter(identity, user_id)
        requests = await self._leave.list(user_id=owner_filter, status=status)
        return [LeaveRequestResponse.model_validate(r) for r in requests]

    async def review_leave_request(
        self,
        identity: IdentityContext,
        leave_id: int,
        request: LeaveReviewRequest,
    ) -> LeaveRequestResponse:
        leave = await self._leave.update_fields(
            leave_id,
            {
                "status": request.status,
                "reviewed_by": identity.id,
                "review_comments": request.comments,
                "reviewed_at": datetime.now(timezone.utc),
            },
        )
        if leave is None:
            raise NotFoundError("Leave request not found")
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.LEAVE_REQUEST,
            entity_id=leave_id,
            changes={"status": request.status},
        )
        return LeaveRequestResponse.model_validate(leave)
