"""
Database connection for the catalog.

Uses SQLAlchemy 2.0 async engine. The URL comes from ``DATABASE_URL``
(``sqlite+aiosqlite`` by default, ``postgresql+asyncpg`` in deployments).
"""
from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from canasta.core.config import get_settings


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_engine() -> AsyncEngine:
    global _engine, _session_factory

    if _engine is None:
        settings = get_settings()
        options = {"echo": settings.DB_ECHO}
        if settings.DATABASE_URL.startswith("sqlite"):
            # aiosqlite connections are bound to the loop that opened them
            options["poolclass"] = NullPool
        else:
            options["pool_pre_ping"] = True
        _engine = create_async_engine(settings.DATABASE_URL, **options)
        _session_factory = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _engine


def get_session_factory() -> async_sessionmaker:
    if _session_factory is None:
        get_engine()
    return _session_factory


async def close_db() -> None:
    """Dispose of the engine; the next call to get_engine() builds a new one."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI - provides a read session.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with get_session_factory()() as session:
        yield session


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        yield session


async def check_db_health() -> dict:
    """Check database connectivity and return status."""
    try:
        async with session_scope() as db:
            result = await db.execute(text("SELECT 1"))
            result.scalar()
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        return {"status": "unhealthy", "database": "disconnected", "error": str(e)}
