"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared logging setup and filesystem helpers for the test suites and runner.

Exports:
    - ConfigLoader / get_config: YAML configuration with environment overrides
    - init_logger: Initialize loguru logger from the logging config
    - ensure_directory: Create an output directory if it is missing

Usage:
    from autotest_tools.common import init_logger, ensure_directory

    init_logger(level="DEBUG")
    ensure_directory("screenshots/")

================================================================================
"""

import os
import sys
from typing import Optional

from loguru import logger

from .config_loader import ConfigLoader, get_config


DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Settings not passed explicitly come from the ``logging`` section of
    ``config/config.yaml``. ``$LOG_LEVEL`` wins over ``logging.level``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to (``logging.file``).
        force: Re-initialize even if already configured.

    Example:
        init_logger()  # Use config
        init_logger(level="DEBUG", log_file="logs/ui_tests.log")
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    # Remove default handler
    logger.remove()

    level = str(level or os.environ.get("LOG_LEVEL") or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or get_config("logging.file")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: str) -> str:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The path (for chaining)
    """
    os.makedirs(path, exist_ok=True)
    return path


__all__ = [
    "ConfigLoader",
    "get_config",
    "init_logger",
    "ensure_directory",
]
