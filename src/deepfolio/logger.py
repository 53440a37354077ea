"""
Loguru setup for deepfolio.

Console output goes to stderr so JSON printed on stdout stays clean.
An optional log file captures everything at DEBUG level.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function} | {message}"


def setup_logger(level: str = "WARNING", log_file: Optional[Path] = None) -> Optional[Path]:
    """
    Configure loguru sinks.

    Args:
        level: Minimum level for the console sink
        log_file: When given, also write DEBUG and above to this file

    Returns:
        Path to the log file, or None
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level.upper(), colorize=True)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
        logger.debug(f"Command: {' '.join(sys.argv)}")

    return log_file
