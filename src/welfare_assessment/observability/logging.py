"""Shared logging utilities for assessment runs.

Usage example:
    from welfare_assessment.observability.logging import get_logger

    logger = get_logger("welfare_assessment.batch")
    logger.info("Assessed %s surveys", survey_count)
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_PACKAGE_PREFIX = "welfare_assessment"

_level = logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Return a logger with a single UTC-stamped stream handler.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        The named logger, configured once and reused on later calls.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_level)
        logger.propagate = False
    return logger


def set_log_level(level: str) -> None:
    """Set the level for package loggers, both existing and created later."""
    global _level
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    _level = numeric
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name == _PACKAGE_PREFIX or name.startswith(f"{_PACKAGE_PREFIX}."):
            logger.setLevel(numeric)
