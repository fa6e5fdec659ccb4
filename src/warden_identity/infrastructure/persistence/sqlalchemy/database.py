"""Async engine and session factory built from application settings."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from warden_config.settings import get_settings

if TYPE_CHECKING:
    from warden_config.settings import Settings


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create an async engine for the configured database."""
    options: dict = {"echo": settings.database_echo}
    if settings.database_type != "sqlite":
        options["pool_pre_ping"] = True  # Verify connections before use
    return create_async_engine(settings.database_url, **options)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories map rows to domain objects eagerly; nothing is
    # re-read after commit.
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Get the shared async database engine (singleton)."""
    return create_engine_from_settings(get_settings())


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return create_session_maker(get_engine())
