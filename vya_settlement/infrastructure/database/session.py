"""Ledger store engine and session lifecycle."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vya_settlement.core.config import DatabaseSettings, get_settings
from vya_settlement.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def engine_options(database: DatabaseSettings, *, echo: bool = False) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": database.echo or echo}
    if is_sqlite(database.url):
        # concurrent webhook deliveries wait for the file lock instead of failing
        options["connect_args"] = {"timeout": database.sqlite_busy_timeout}
        return options

    options["pool_pre_ping"] = True
    if database.pool_size is not None:
        options["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        options["max_overflow"] = database.max_overflow
    return options


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **engine_options(settings.database, echo=settings.debug))
        AsyncSessionFactory = async_sessionmaker(bind=_engine, class_=AsyncSession, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    global _engine, AsyncSessionFactory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    AsyncSessionFactory = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session; commits what the service left pending, rolls back on error."""
    get_engine()
    assert AsyncSessionFactory is not None
    async with AsyncSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables for development and test runs; deployments use Alembic."""
    from vya_settlement.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
