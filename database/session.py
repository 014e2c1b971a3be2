"""
Async SQLAlchemy engine and session factory, built from settings.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings
from database.models import Base

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the engine with bounded connect / checkout timeouts."""
    url = settings.database_url
    kwargs = {"echo": False, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        kwargs.update(pool_size=10, max_overflow=20, pool_recycle=3600)
        kwargs["pool_timeout"] = settings.db_pool_timeout
    return create_async_engine(
        url,
        connect_args={"timeout": settings.db_connect_timeout},
        **kwargs,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> bool:
    """
    Create missing tables.

    A failure is logged and reported as ``False``; the caller keeps serving
    so that individual requests fail instead of the whole process.
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception:
        logger.exception("Database bootstrap failed for %s", engine.url.render_as_string(hide_password=True))
        return False
    logger.info("Database connected successfully")
    return True


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
