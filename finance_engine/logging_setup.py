"""Logging helpers for the ``finance_engine`` package.

Engine modules only call ``get_logger(__name__)``; output stays silent
until the host application calls ``configure_logging`` or configures
the ``finance_engine`` logger itself.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional, Union

from .config import LOG_LEVEL_ENV

_PKG_LOGGER_NAME = "finance_engine"


def configure_logging(level: Optional[Union[int, str]] = None, stream: IO[str] = sys.stderr) -> None:
    """Send package log records to ``stream``.

    ``level`` falls back to ``FINANCE_ENGINE_LOG_LEVEL``, then ``INFO``.
    Calling again replaces the previous handler.
    """
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = level.strip().upper()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
