"""
Pytest configuration for warden_identity integration tests.

Integration tests run against in-memory SQLite by default (see
tests/shared/fixtures/database.py). Import the shared fixtures to make
them available.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    session_maker,
)

__all__ = [
    "async_engine",
    "db_session",
    "session_maker",
]
