# app/infrastructure/database/session.py

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Database:
    """
    Owns the async engine and session factory. Constructed once per app and
    passed to whatever needs storage; there is no module-level engine.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        if url.startswith("sqlite"):
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
        else:
            engine_kwargs = {
                "pool_pre_ping": True,
                "pool_size": 10,
                "max_overflow": 20,
            }
        self.url = url
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
            class_=AsyncSession,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def create_all(self) -> None:
        # Importing the models registers their tables on Base.metadata.
        from app.infrastructure.database import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
