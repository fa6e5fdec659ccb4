"""Logging setup for processes embedding the identity engine."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from warden_config.settings import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_APP_LOGGERS = ("warden_config", "warden_identity")
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")


def configure_logging(settings: Settings) -> None:
    """Configure console logging.

    - Console output with timestamps and module names
    - Configurable log level for warden modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in _APP_LOGGERS:
        logging.getLogger(name).setLevel(log_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured for %s at %s",
        settings.app_name,
        logging.getLevelName(log_level),
    )
