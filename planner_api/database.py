### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - App Database Setup -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
App Database Setup

Relational store for:
- Tenants, organizations and module activations
- Users, profiles, roles and permissions
- Planning data (events, technical teams)

Uses asynchronous SQLAlchemy so credential lookups never block the event loop.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

from fastapi import Depends
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from planner_api.config import get_api_settings

settings = get_api_settings()

DATABASE_URL = settings.database_url


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database"""
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


_ensure_sqlite_directory(DATABASE_URL)

# Create engine (asynchronous)
engine = create_async_engine(
    DATABASE_URL,
    echo=False,  # Set True for SQL debugging
)

# Session factory
SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

# Base class for models
Base = declarative_base()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Dependency that provides the session factory.

    Overridden in tests to point at an isolated database.
    """
    return SessionLocal


async def get_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Usage:
        @app.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_session)):
            ...
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Initialize the database - create all tables.

    Call this on application startup (development only, production uses Alembic).
    """
    # Import models to register them with Base
    from planner_api.models import planning, role, tenant, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
