"""Fixtures for API unit tests: app on a throwaway SQLite file, seeded users, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from app.config.settings import AppSettings
from app.infrastructure.database.models import AuditLog, User
from app.infrastructure.database.user_repository import UserRepository
from app.main import create_app
from app.security.rbac import Role

TEST_SECRET = "test-secret-that-is-at-least-32-characters-long"
DEFAULT_PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path):
    return AppSettings(
        _env_file=None,
        environment="test",
        jwt_secret=TEST_SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        bcrypt_rounds=4,
    )


@pytest.fixture
async def app(settings):
    """Fresh app and schema per test. Outstanding audit writes land before the engine is disposed."""
    application = create_app(settings)
    await application.state.database.create_all()
    yield application
    await application.state.audit_logger.drain()
    await application.state.database.dispose()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def seed_user(app):
    """Insert a user directly; returns the stored row."""

    async def _seed(
        username: str,
        role: Role = Role.WORKER,
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
    ) -> User:
        async with app.state.database.session() as session:
            return await UserRepository(session).create(
                User(
                    username=username,
                    email=f"{username}@example.com",
                    full_name=username.title(),
                    password_hash=app.state.password_hasher.hash(password),
                    role=role.value,
                    is_active=is_active,
                )
            )

    return _seed


@pytest.fixture
def auth_headers(app):
    """Bearer header for a stored user, signed with the app's token service."""

    def _headers(user: User) -> dict:
        token = app.state.token_service.issue(
            user_id=user.id,
            username=user.username,
            role=Role(user.role),
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def audit_rows(app):
    """Rows in audit_logs after every scheduled write has finished, oldest first."""

    async def _rows(**filters) -> list[AuditLog]:
        await app.state.audit_logger.drain()
        stmt = select(AuditLog).filter_by(**filters).order_by(AuditLog.id)
        async with app.state.database.session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    return _rows
