"""Logging setup for applications embedding wayfinder.

Library modules only create loggers; handlers and levels are left to the
host application, which may call configure_logging() once at start-up.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config
from .domain.errors import ConfigurationError

LOGGER_NAME = "wayfinder"


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Args:
        config: Logging settings, defaults to the global configuration.

    Returns:
        The configured package logger.

    Raises:
        ConfigurationError: If the configured level is not a logging level.
    """
    config = config or get_config().observability
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {config.level}",
            setting_name="WAYFINDER_LOG_LEVEL",
            expected_type="DEBUG | INFO | WARNING | ERROR | CRITICAL",
        )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(getattr(h, "_wayfinder", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler._wayfinder = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    for handler in logger.handlers:
        if getattr(handler, "_wayfinder", False):
            handler.setFormatter(logging.Formatter(config.format))
    return logger
