"""Pydantic schemas for attendance records and leave requests."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

AttendanceStatus = Literal["present", "absent", "late", "half_day", "leave"]
LeaveStatus = Literal["pending", "approved", "rejected"]


class ClockInRequest(BaseModel):
    project_id: Optional[int] = None
    notes: Optional[str] = None


class AttendanceMarkRequest(BaseModel):
    """Supervisor-entered attendance for another user."""

    user_id: int
    project_id: Optional[int] = None
    attendance_date: date
    status: AttendanceStatus = "present"
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None
    notes: Optional[str] = None


class AttendanceUpdateRequest(BaseModel):
    status: Optional[AttendanceStatus] = None
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None
    notes: Optional[str] = None


class AttendanceResponse(BaseModel):
    id: int
    user_id: int
    project_id: Optional[int] = None
    attendance_date: date
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None
    hours_worked: Optional[float] = None
    status: str
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class LeaveRequestCreateRequest(BaseModel):
    start_date: date
    end_date: date
    leave_type: str = Field(..., min_length=1, max_length=50)
    reason: Optional[str] = None

    @model_validator(mode="after")
    def end_not_before_start(self) -> "LeaveRequestCreateRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class LeaveReviewRequest(BaseModel):
    status: LeaveStatus
    comments: Optional[str] = None


class LeaveRequestResponse(BaseModel):
    id: int
    user_id: int
    start_date: date
    end_date: date
    leave_type: str
    reason: Optional[str] = None
    status: str
    reviewed_by: Optional[int] = None
    review_comments: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}
