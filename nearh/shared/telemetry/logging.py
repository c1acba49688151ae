"""Logging configuration for the application."""

import logging
import sys

from nearh.core.config import get_settings


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. Output goes
    to stdout. Cache hit/miss lines are DEBUG; degraded cache paths are
    WARNING so they stay visible in production.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # redis-py logs every reconnect attempt at DEBUG; keep it out of app debug output.
    logging.getLogger("redis").setLevel(max(log_level, logging.INFO))

