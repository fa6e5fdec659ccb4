"""Root pytest configuration.

Test Structure:
    tests/
    ├── warden_config/         # Settings and logging setup
    ├── warden_identity/       # Identity domain tests (users, auth, tokens)
    │   ├── unit/              # Fast, isolated tests (mocked repositories)
    │   └── integration/       # Tests against a real database session
    └── shared/                # Shared fixtures and utilities

Environment Variables:
    TEST_DATABASE_URL    Async SQLAlchemy URL for integration tests
                         (default: in-memory SQLite via aiosqlite)
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from warden_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load test overrides (e.g. TEST_DATABASE_URL) when present
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Ensure every test session starts from freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
