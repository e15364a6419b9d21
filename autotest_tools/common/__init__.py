"""
================================================================================
Autotest Tools Common Utilities
================================================================================

This module provides the shared logging setup for the harness and the runner.

Exports:
    - init_logger: Function to initialize loguru logger with standard settings

Usage:
    from autotest_tools.common import init_logger

    init_logger(level=config.log_level, log_file=config.log_file)

================================================================================
"""

import os
import sys
from typing import Optional

from loguru import logger

# ============================================================
# Logging Setup
# ============================================================

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: str = "INFO",
    format_string: str = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
        rotation: Rotation policy for the file sink
        retention: Retention policy for the file sink
        force: Reconfigure even if already initialized

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/harness.log")
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    # Remove default handler
    logger.remove()

    format_string = format_string or DEFAULT_FORMAT

    # Add console handler
    logger.add(
        sys.stderr,
        format=format_string,
        level=level.upper(),
        colorize=True,
    )

    # Add file handler if specified
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level.upper(),
            rotation=rotation,
            retention=retention,
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


# Export public API
__all__ = [
    "init_logger",
]
