"""Tests for configure_logging."""

import logging

import pytest

from warden_config import Settings, configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("warden_config", "warden_identity", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestConfigureLogging:
    def test_sets_application_level(self, restore_logging):
        configure_logging(Settings(_env_file=None, log_level="DEBUG"))

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("warden_identity").level == logging.DEBUG

    def test_quiets_third_party_loggers(self, restore_logging):
        configure_logging(Settings(_env_file=None, log_level="DEBUG"))

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, restore_logging):
        configure_logging(Settings(_env_file=None, log_level="chatty"))

        assert logging.getLogger("warden_config").level == logging.INFO
