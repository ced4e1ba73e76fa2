"""
Shared logger utility for the retail inventory toolkit.
Provides a consistent logger configuration for all modules.
"""

import logging
import os

LOG_LEVEL_ENV = "RETAIL_LOG_LEVEL"


def get_logger(name: str | None = None, level: str | int | None = None) -> logging.Logger:
    """
    Returns a logger with the specified name and a standard stream format.
    The level comes from ``level``, else the RETAIL_LOG_LEVEL environment
    variable, else INFO. If no name is provided, returns the root logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    resolved = level if level is not None else os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    logger.setLevel(resolved)
    return logger
