"""Attendance API router: clock-in/out, supervisor entries, leave requests."""

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import CurrentIdentity, get_attendance_service, require_roles
from app.application.attendance_service import AttendanceService
from app.domain.schemas.attendance import (
    AttendanceMarkRequest,
    AttendanceResponse,
    AttendanceUpdateRequest,
    ClockInRequest,
    LeaveRequestCreateRequest,
    LeaveRequestResponse,
    LeaveReviewRequest,
)
from app.security import policies
from app.security.rbac import IdentityContext

router = APIRouter()

AttendanceServiceDep = Annotated[AttendanceService, Depends(get_attendance_service)]


@router.get("", response_model=list[AttendanceResponse])
async def list_attendance(
    identity: CurrentIdentity,
    attendance_service: AttendanceServiceDep,
    user_id: Optional[int] = None,
    project_id: Optional[int] = None,
    on_date: Annotated[Optional[date], Query(alias="date")] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
):
    return await attendance_service.list_attendance(
        user_id=user_id,
        project_id=project_id,
        on_date=on_date,
        start_date=start_date,
        end_date=end_date,
    )


@router.post("/clock-in", response_model=AttendanceResponse, status_code=201)
async def clock_in(
    identity: CurrentIdentity,
    attendance_service: AttendanceServiceDep,
    body: Optional[ClockInRequest] = None,
):
    return await attendance_service.clock_in(identity, body or ClockInRequest())


@router.post("/clock-out", response_model=AttendanceResponse)
async def clock_out(identity: CurrentIdentity, attendance_service: AttendanceServiceDep):
    return await attendance_service.clock_out(identity)


@router.post("/mark", response_model=AttendanceResponse, status_code=201)
async def mark_attendance(
    body: AttendanceMarkRequest,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.MARK_ATTENDANCE))],
    attendance_service: AttendanceServiceDep,
):
    return await attendance_service.mark_attendance(identity, body)


@router.post("/leave-requests", response_model=LeaveRequestResponse, status_code=201)
async def create_leave_request(
    body: LeaveRequestCreateRequest,
    identity: CurrentIdentity,
    attendance_service: AttendanceServiceDep,
):
    return await attendance_service.create_leave_request(identity, body)


@router.get("/leave-requests", response_model=list[LeaveRequestResponse])
async def list_leave_requests(
    identity: CurrentIdentity,
    attendance_service: AttendanceServiceDep,
    user_id: Optional[int] = None,
    status: Optional[str] = None,
):
    return await attendance_service.list_leave_requests(identity, user_id=user_id, status=status)


@router.patch("/leave-requests/{leave_id}", response_model=LeaveRequestResponse)
async def review_leave_request(
    leave_id: int,
    body: LeaveReviewRequest,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.REVIEW_LEAVE_REQUEST))],
    attendance_service: AttendanceServiceDep,
):
    return await attendance_service.review_leave_request(identity, leave_id, body)


@router.put("/{attendance_id}", response_model=AttendanceResponse)
async def update_attendance(
    attendance_id: int,
    body: AttendanceUpdateRequest,
    identity: Annotated[IdentityContext, Depends(require_roles(policies.UPDATE_ATTENDANCE))],
    attendance_service: AttendanceServiceDep,
):
    return await attendance_service.update_attendance(identity, attendance_id, body)
