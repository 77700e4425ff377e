# scripts/check_db.py
import sys
from pathlib import Path
from sqlalchemy import text

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from app.config.settings import get_settings
from app.infrastructure.database.session import Database


async def check_connection():
    database = Database(get_settings().database_url)
    try:
        async with database.engine.begin() as conn:
            result = await conn.execute(text("SELECT 1"))
            print("DB Connected:", result.scalar())
    finally:
        await database.dispose()

asyncio.run(check_connection())
