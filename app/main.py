# app/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.middleware import CorrelationIdMiddleware, RequestAuditMiddleware
from app.api.routers import (
    attendance,
    audit,
    auth,
    documents,
    equipment,
    health,
    materials,
    projects,
    tasks,
    users,
)
from app.config.logging import configure_logging
from app.config.settings import AppSettings, get_settings
from app.domain.exceptions import DomainError, NotFoundError
from app.governance.audit_logger import AuditLogger
from app.infrastructure.database.audit_repository_db import DbAuditRepository
from app.infrastructure.database.session import Database
from app.security.exceptions import (
    InsufficientPermissionsError,
    InvalidCredentialsError,
    UnauthenticatedError,
)
from app.security.passwords import PasswordHasher
from app.security.tokens import TokenService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Let in-flight audit writes land before the engine goes away.
    await app.state.audit_logger.drain()
    await app.state.database.dispose()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated_handler(request: Request, exc: UnauthenticatedError):
        return _error(401, exc.message)

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
        # AccountDeactivatedError lands here too; the wording stays generic.
        return _error(401, exc.message)

    @app.exception_handler(InsufficientPermissionsError)
    async def insufficient_permissions_handler(request: Request, exc: InsufficientPermissionsError):
        return _error(403, exc.message)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return _error(400, exc.message)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", extra={"path": request.url.path})
        return _error(500, "Internal server error")


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    database = Database(settings.database_url, echo=settings.debug)
    app.state.settings = settings
    app.state.database = database
    app.state.token_service = TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration_minutes=settings.jwt_expiration_minutes,
    )
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.audit_logger = AuditLogger(
        repository=DbAuditRepository(database.session_factory),
        logger=logging.getLogger("app.governance.audit"),
        list_limit=settings.audit_list_limit,
    )

    # Middleware order: last added runs first (outermost). Request flow: CorrelationId -> RequestAudit.
    app.add_middleware(RequestAuditMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    register_exception_handlers(app)

    # Routers: /health, /auth, /users, /projects, /tasks, /attendance, /documents, /materials, /equipment, /audit
    app.include_router(health.router)
    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(users.router, prefix="/users", tags=["users"])
    app.include_router(projects.router, prefix="/projects", tags=["projects"])
    app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
    app.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
    app.include_router(documents.router, prefix="/documents", tags=["documents"])
    app.include_router(materials.router, prefix="/materials", tags=["materials"])
    app.include_router(equipment.router, prefix="/equipment", tags=["equipment"])
    app.include_router(audit.router, prefix="/audit", tags=["audit"])
    return app
