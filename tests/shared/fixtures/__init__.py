"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.clock import FakeClock
from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    session_maker,
)

__all__ = [
    "FakeClock",
    "async_engine",
    "db_session",
    "session_maker",
]
