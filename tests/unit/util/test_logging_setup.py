"""Unit tests for the stdlib logging bridge."""

import logging

import logfire
import pytest

from ritual.config import Settings
from ritual.util.logging import DRIVER_LOGGERS, engine_log_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_installs_single_logfire_handler(self, restore_root_logger):
        # Arrange
        settings = Settings(environment="test")

        # Act
        setup_logging(settings)
        setup_logging(settings)

        # Assert
        bridges = [
            h
            for h in restore_root_logger.handlers
            if isinstance(h, logfire.LogfireLoggingHandler)
        ]
        assert len(bridges) == 1

    def test_driver_loggers_quiet(self, restore_root_logger):
        setup_logging(Settings(environment="test", debug=True))

        for name in DRIVER_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_engine_level_follows_debug(self, restore_root_logger):
        setup_logging(Settings(environment="test", debug=True))

        assert logging.getLogger("ritual").level == logging.DEBUG
        assert engine_log_level(Settings(environment="test")) == logging.INFO
