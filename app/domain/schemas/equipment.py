"""Pydantic schemas for equipment, breakdown reports and maintenance records."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class EquipmentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    project_id: Optional[int] = None
    status: str = "available"
    last_maintenance_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None


class EquipmentUpdateRequest(BaseModel):
    """Partial update. Fields left null keep their stored value."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    serial_number: Optional[str] = Field(None, max_length=100)
    project_id: Optional[int] = None
    status: Optional[str] = None
    last_maintenance_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None


class EquipmentResponse(BaseModel):
    id: int
    name: str
    type: Optional[str] = None
    serial_number: Optional[str] = None
    project_id: Optional[int] = None
    status: str
    last_maintenance_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BreakdownCreateRequest(BaseModel):
    description: Optional[str] = None
    severity: str = Field("medium", min_length=1, max_length=20)
    estimated_repair_date: Optional[date] = None


class BreakdownResponse(BaseModel):
    id: int
    equipment_id: int
    reported_by: int
    description: Optional[str] = None
    severity: str
    estimated_repair_date: Optional[date] = None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MaintenanceCreateRequest(BaseModel):
    maintenance_type: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    cost: Optional[float] = Field(None, ge=0)
    next_maintenance_date: Optional[date] = None


class MaintenanceResponse(BaseModel):
    id: int
    equipment_id: int
    performed_by: int
    maintenance_type: str
    description: Optional[str] = None
    cost: Optional[float] = None
    next_maintenance_date: Optional[date] = None
    created_at: datetime

    model_config = {"from_attributes": True}
