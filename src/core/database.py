"""
Async database engine and session factories.

SQLAlchemy 2.0 async API. Production runs on asyncpg; a
``sqlite+aiosqlite`` URL works for local development (no pool sizing).
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from core.config import settings


def _engine_options(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    return {"pool_size": 10, "max_overflow": 20, "pool_pre_ping": True}


# ── Engine ────────────────────────────────────────────────────────────

engine = create_async_engine(settings.database_url, echo=False, **_engine_options(settings.database_url))

# ── Session Factory ───────────────────────────────────────────────────
# Checks open their own short-lived sessions from this factory so that
# concurrent checks never share a transaction.

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    """Base class for all ORM models."""


# ── Dependency (for FastAPI) ──────────────────────────────────────────

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, committed on success and rolled back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
