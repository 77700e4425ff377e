# Application layer: services that orchestrate domain, security, governance and infrastructure.

from app.application.attendance_service import AttendanceService
from app.application.auth_service import AuthService
from app.application.document_service import DocumentService
from app.application.equipment_service import EquipmentService
from app.application.material_service import MaterialService
from app.application.project_service import ProjectService
from app.application.task_service import TaskService
from app.application.user_service import UserService

__all__ = [
    "AttendanceService",
    "AuthService",
    "DocumentService",
    "EquipmentService",
    "MaterialService",
    "ProjectService",
    "TaskService",
    "UserService",
]
