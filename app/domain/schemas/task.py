"""Pydantic schemas for tasks and task activities."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class TaskCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    project_id: Optional[int] = None
    assigned_to: Optional[int] = None
    priority: str = "medium"
    due_date: Optional[date] = None
    status: str = "pending"


class TaskUpdateRequest(BaseModel):
    """Partial update. Fields left null keep their stored value."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[str] = None
    progress_notes: Optional[str] = None
    completion_percentage: Optional[int] = Field(None, ge=0, le=100)


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    project_id: Optional[int] = None
    assigned_to: Optional[int] = None
    created_by: Optional[int] = None
    priority: str
    status: str
    due_date: Optional[date] = None
    progress_notes: Optional[str] = None
    completion_percentage: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TaskActivityCreateRequest(BaseModel):
    activity_type: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    hours_worked: Optional[float] = Field(None, ge=0)


class TaskActivityResponse(BaseModel):
    id: int
    task_id: int
    user_id: int
    activity_type: str
    description: Optional[str] = None
    hours_worked: Optional[float] = None
    created_at: datetime

    model_config = {"from_attributes": True}
