# scripts/init_db.py
"""Create tables and a default admin account if none exists.

The admin password comes from ADMIN_PASSWORD (default "admin123"); change it after first login.
"""
import os
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from app.config.settings import get_settings
from app.infrastructure.database.models import User
from app.infrastructure.database.session import Database
from app.infrastructure.database.user_repository import UserRepository
from app.security.passwords import PasswordHasher
from app.security.rbac import Role


async def init_db():
    settings = get_settings()
    database = Database(settings.database_url)
    try:
        await database.create_all()
        print("Database schema initialized")

        async with database.session() as session:
            users = UserRepository(session)
            if await users.get_by_username("admin") is not None:
                print("Admin user already exists")
                return
            hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
            await users.create(
                User(
                    username="admin",
                    password_hash=hasher.hash(os.environ.get("ADMIN_PASSWORD", "admin123")),
                    email="admin@example.com",
                    full_name="System Administrator",
                    role=Role.ADMIN.value,
                    is_active=True,
                )
            )
            print("Default admin user created (username: admin)")
    finally:
        await database.dispose()

asyncio.run(init_db())
