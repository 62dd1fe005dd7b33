"""Tests for the package logging setup."""

import logging

import pytest

from wayfinder.config import ObservabilityConfig
from wayfinder.domain.errors import ConfigurationError
from wayfinder.logging_config import LOGGER_NAME, configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        if getattr(handler, "_wayfinder", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_configure_logging_sets_level_and_single_handler(package_logger):
    logger = configure_logging(ObservabilityConfig(level="debug"))
    configure_logging(ObservabilityConfig(level="WARNING", format="%(message)s"))

    handlers = [h for h in package_logger.handlers if getattr(h, "_wayfinder", False)]
    assert logger is package_logger
    assert logger.level == logging.WARNING
    assert len(handlers) == 1
    assert handlers[0].formatter._fmt == "%(message)s"


def test_configure_logging_rejects_unknown_level(package_logger):
    with pytest.raises(ConfigurationError) as exc_info:
        configure_logging(ObservabilityConfig(level="LOUD"))

    assert exc_info.value.setting_name == "WAYFINDER_LOG_LEVEL"
    assert "LOUD" in str(exc_info.value)
