from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from recruitment.core.config import get_settings
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _connect_args(url: str, statement_timeout_ms: int) -> dict[str, Any]:
    # A stuck reconciliation must abort and roll back instead of holding row locks.
    if url.startswith("postgresql+asyncpg://") and statement_timeout_ms > 0:
        return {"server_settings": {"statement_timeout": str(statement_timeout_ms)}}
    return {}


def _get_engine() -> AsyncEngine:
    global _engine

    if _engine is None:
        settings = get_settings()
        url = settings.async_database_url
        _engine = create_async_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            connect_args=_connect_args(url, settings.db_statement_timeout_ms),
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            _get_engine(),
            expire_on_commit=False,
        )
    return _session_factory


async def get_session() -> AsyncIterator[AsyncSession]:
    session_factory = get_session_factory()
    async with session_factory() as session:
        yield session
