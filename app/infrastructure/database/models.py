# app/infrastructure/database/models.py

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB

from app.infrastructure.database.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampedModel(Base):
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)


class User(TimestampedModel):
    __tablename__ = "users"

    username = Column(String(100), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="worker")
    is_active = Column(Boolean, nullable=False, default=True)


class Project(TimestampedModel):
    __tablename__ = "projects"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    supervisor_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    status = Column(String(50), nullable=False, default="planning")
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)


class Task(TimestampedModel):
    __tablename__ = "tasks"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    priority = Column(String(20), nullable=False, default="medium")
    status = Column(String(50), nullable=False, default="pending")
    due_date = Column(Date, nullable=True)
    progress_notes = Column(Text, nullable=True)
    completion_percentage = Column(Integer, nullable=True)


class TaskActivity(TimestampedModel):
    __tablename__ = "task_activities"

    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    activity_type = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    hours_worked = Column(Float, nullable=True)


class Attendance(TimestampedModel):
    __tablename__ = "attendance"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    attendance_date = Column(Date, nullable=False, index=True)
    clock_in_time = Column(DateTime(timezone=True), nullable=True)
    clock_out_time = Column(DateTime(timezone=True), nullable=True)
    hours_worked = Column(Float, nullable=True)
    status = Column(String(20), nullable=False, default="present")
    notes = Column(Text, nullable=True)


class LeaveRequest(TimestampedModel):
    __tablename__ = "leave_requests"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    leave_type = Column(String(50), nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    review_comments = Column(Text, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)


class Document(TimestampedModel):
    __tablename__ = "documents"

    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True, index=True)
    document_type = Column(String(50), nullable=False, default="other")
    file_name = Column(String(255), nullable=False)
    file_path = Column(String(1024), nullable=False)
    file_size = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=False)


class Material(TimestampedModel):
    __tablename__ = "materials"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    unit = Column(String(50), nullable=False)
    quantity = Column(Float, nullable=False, default=0)
    current_balance = Column(Float, nullable=False, default=0)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True, index=True)
    unit_price = Column(Float, nullable=True)
    supplier = Column(String(255), nullable=True)


class MaterialUsage(TimestampedModel):
    __tablename__ = "material_usage"

    material_id = Column(Integer, ForeignKey("materials.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    quantity_used = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)


class MaterialRequisition(TimestampedModel):
    __tablename__ = "material_requisitions"

    material_id = Column(Integer, ForeignKey("materials.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True, index=True)
    requested_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    quantity_requested = Column(Float, nullable=False)
    approved_quantity = Column(Float, nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)


class Equipment(TimestampedModel):
    __tablename__ = "equipment"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=True)
    serial_number = Column(String(100), nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True, index=True)
    status = Column(String(50), nullable=False, default="available")
    last_maintenance_date = Column(Date, nullable=True)
    next_maintenance_date = Column(Date, nullable=True)


class EquipmentBreakdown(TimestampedModel):
    __tablename__ = "equipment_breakdowns"

    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=False, index=True)
    reported_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    description = Column(Text, nullable=True)
    severity = Column(String(20), nullable=False, default="medium")
    estimated_repair_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="reported")


class EquipmentMaintenance(TimestampedModel):
    __tablename__ = "equipment_maintenance"

    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=False, index=True)
    performed_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    maintenance_type = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    cost = Column(Float, nullable=True)
    next_maintenance_date = Column(Date, nullable=True)


class AuditLog(Base):
    """Append-only. Rows are inserted by the audit repository and never updated or deleted."""

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    action = Column(String(20), nullable=False)
    entity_type = Column(String(50), nullable=False, index=True)
    entity_id = Column(Integer, nullable=True, index=True)
    changes = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
