"""Logging setup for the quiz CLI."""

from __future__ import annotations

import logging
import os
import sys
from logging import Logger

LOG_LEVEL_ENV = "TIMEDQUIZ_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def default_log_level() -> str:
    """Level named by the environment, or the quiet default."""
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: str | None = None) -> Logger:
    """Send package logs to stderr so they never mix with quiz prompts."""
    name = (level or default_log_level()).upper()
    numeric = getattr(logging, name, None)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logger = logging.getLogger("timedquiz")
    logger.setLevel(numeric)
    if logger.handlers:
        logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
