"""
Logging helpers.

Library modules log through ``logging.getLogger(__name__)``; the package logger
carries a NullHandler so nothing is printed unless the application configures
logging. Scripts that want console feedback call :func:`get_console_logger`.
"""
from __future__ import annotations

import logging

PACKAGE_LOGGER = "timegen"


def get_console_logger(level: int = logging.INFO) -> logging.Logger:
    """Return the package logger with a console handler attached.

    The handler is only added once across repeated calls.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if any(getattr(h, "_timegen_console", False) for h in logger.handlers):
        return logger

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(formatter)
    ch._timegen_console = True  # type: ignore[attr-defined]
    logger.addHandler(ch)
    return logger


def feedback_level(feedback: bool) -> int:
    """Level used for run feedback: INFO when requested, DEBUG otherwise."""
    return logging.INFO if feedback else logging.DEBUG
