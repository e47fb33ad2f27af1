"""
Loguru configuration for the analytics core.

Engines log through the shared ``loguru.logger``; this module only decides
where records go and at which level.
"""

import sys

from loguru import logger

from relval.config.settings import get_settings


def configure_logging(level: str | None = None) -> None:
    """
    Enable relval log records and replace loguru's default sink with a
    single stderr sink. Until this is called the package logs nothing.

    Args:
        level: Minimum level to emit. Defaults to RELVAL_LOG_LEVEL (INFO).
    """
    if level is None:
        level = get_settings().logging.level

    logger.enable("relval")
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function} | {message}",
    )
