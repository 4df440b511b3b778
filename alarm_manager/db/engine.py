"""Async SQLAlchemy engine and session factory."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from alarm_manager.config import get_settings

_SQLITE_PREFIX = "sqlite+aiosqlite:///"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; SQLite files get their directory and FK enforcement."""
    if database_url.startswith(_SQLITE_PREFIX):
        db_path = database_url.replace(_SQLITE_PREFIX, "")
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    eng = create_async_engine(database_url, echo=echo)
    if eng.dialect.name == "sqlite":
        event.listen(eng.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return eng


def build_session_factory(eng: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(eng, class_=AsyncSession, expire_on_commit=False)


@lru_cache
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return build_engine(settings.database_url, echo=settings.echo_sql)


def session_factory() -> async_sessionmaker[AsyncSession]:
    return build_session_factory(get_engine())


async def init_db(eng: AsyncEngine | None = None) -> None:
    """Create all tables."""
    from alarm_manager.models import Base

    eng = eng or get_engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await get_engine().dispose()
    get_engine.cache_clear()
