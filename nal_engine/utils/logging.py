"""
Logging setup driven by LoggingConfig.

Library modules only create module-level stdlib loggers; handlers are
installed here, on the "nal_engine" logger, when a host application asks for
them. Records are rendered by structlog, as JSON or as console lines.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from nal_engine.core.config import LoggingConfig, get_config

PACKAGE_LOGGER = "nal_engine"

# Applied to every stdlib record before rendering
SHARED_PROCESSORS = [
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def build_formatter(config: LoggingConfig) -> structlog.stdlib.ProcessorFormatter:
    """Create the JSON or console formatter for a logging config."""
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=SHARED_PROCESSORS,
    )


def configure_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Install handlers on the package logger.

    Replaces handlers from an earlier call, so calling this again with a new
    config is safe.

    Args:
        config: Logging settings; the global config's logging section if None

    Returns:
        The configured package logger
    """
    global_config = get_config()
    config = config or global_config.logging

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = logging.DEBUG if global_config.debug_mode else getattr(logging, config.level)
    logger.setLevel(level)
    formatter = build_formatter(config)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file_path:
        handlers.append(logging.FileHandler(config.file_path))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger
