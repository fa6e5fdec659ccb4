"""Warden settings.

Sources, strongest first: OS environment, the file named by
``WARDEN_ENV_FILE``, ``config/.env.dev``, ``config/.env``, field defaults.
pydantic-settings does the parsing and range checks.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "WARDEN_ENV_FILE"
_ENV_FILE_CANDIDATES = (".env.dev", ".env")


def _find_project_root() -> Path:
    """Nearest ancestor holding ``config/`` or ``pyproject.toml``, else the cwd."""
    here = Path(__file__).resolve().parent
    for directory in (here, *here.parents):
        if (directory / "config").is_dir() or (directory / "pyproject.toml").is_file():
            return directory
    return Path.cwd()


def get_config_dir() -> Path:
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        candidate = Path(explicit)
        if not candidate.is_absolute():
            candidate = _find_project_root() / candidate
        if candidate.exists():
            return candidate

    for name in _ENV_FILE_CANDIDATES:
        candidate = get_config_dir() / name
        if candidate.exists():
            return candidate
    return None


class Settings(BaseSettings):
    """Configuration for the identity engine and its database."""

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Warden"

    # Database
    database_url: str = "sqlite+aiosqlite:///./warden.db"
    database_echo: bool = False

    # Registration: new users must confirm their email before activation
    confirm_email_addresses: bool = True

    # Password reset
    password_reset_token_expiration_minutes: int = Field(default=60, ge=1)

    # Password hashing
    password_min_length: int = Field(default=8, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Opaque tokens (confirmation / reset)
    token_bytes: int = Field(default=32, ge=16)

    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: object) -> str:
        return str(v).strip().upper() if v else "INFO"

    @property
    def database_type(self) -> str:
        """Dialect name from the URL, e.g. ``sqlite`` or ``postgresql``."""
        return self.database_url.split(":", 1)[0].split("+", 1)[0]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call reloads them."""
    get_settings.cache_clear()
