"""
loguru sinks for the debtwise CLI.

Library modules only ever ``from loguru import logger``; the CLI calls
``setup_logging`` once with the validated ``logging`` config section.
Calculator output goes to stdout, so log lines stay on stderr.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from debtwise.core.config_schema import LoggingConfig

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def setup_logging(settings: LoggingConfig, verbose: bool = False) -> None:
    """
    Replace loguru's sinks with a stderr sink and, if configured, a log file.

    Args:
        settings: The ``logging`` section (level, file, rotation, retention).
        verbose: Force DEBUG on both sinks regardless of ``settings.level``.
    """
    level = "DEBUG" if verbose else settings.level
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if settings.file:
        logger.add(
            settings.file,
            level=level,
            format=FILE_FORMAT,
            rotation=settings.rotation,
            retention=settings.retention,
        )
        logger.debug(f"Logging to {settings.file} at {level}")
