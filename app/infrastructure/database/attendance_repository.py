"""DB-backed attendance and leave-request repositories."""

from datetime import date
from typing import Optional

from sqlalchemy import select

from app.infrastructure.database.models import Attendance, LeaveRequest
from app.infrastructure.database.repository import AsyncRepository


class AttendanceRepository(AsyncRepository[Attendance]):
    model = Attendance

    async def list(
        self,
        user_id: Optional[int] = None,
        project_id: Optional[int] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Attendance]:
        criteria = []
        if user_id is not None:
            criteria.append(Attendance.user_id == user_id)
        if project_id is not None:
            criteria.append(Attendance.project_id == project_id)
        if on_date is not None:
            criteria.append(Attendance.attendance_date == on_date)
        if start_date is not None and end_date is not None:
            criteria.append(Attendance.attendance_date.between(start_date, end_date))
        return await self._list(
            *criteria,
            order_by=(Attendance.attendance_date.desc(), Attendance.clock_in_time.desc(), Attendance.id.desc()),
        )

    async def find_open(self, user_id: int, on_date: date) -> Optional[Attendance]:
        """The user's record for on_date that has a clock-in but no clock-out."""
        stmt = (
            select(Attendance)
            .where(
                Attendance.user_id == user_id,
                Attendance.attendance_date == on_date,
                Attendance.clock_out_time.is_(None),
            )
            .order_by(Attendance.id.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()


class LeaveRequestRepository(AsyncRepository[LeaveRequest]):
    model = LeaveRequest

    async def list(
        self,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[LeaveRequest]:
        criteria = []
        if user_id is not None:
            criteria.append(LeaveRequest.user_id == user_id)
        if status is not None:
            criteria.append(LeaveRequest.status == status)
        return await self._list(*criteria, order_by=(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()))
