"""
Unified output system using Loguru.
User-facing messages go to the rich console and are also written to the log file.
"""

import sys
from pathlib import Path

from loguru import logger

from .console import get_console

# Console style per log level for user-facing messages
LEVEL_STYLES = {
    "debug": "cyan",
    "info": "white",
    "success": "green",
    "warning": "yellow",
    "error": "red",
}

def setup_loguru(
    log_file: Path,
    level: str = "INFO",
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    console_output: bool = False,
) -> None:
    """
    Configure loguru for file logging (the chat console shows user-facing text).

    Args:
        log_file: Path to log file
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        max_file_size_mb: Rotate the log file once it reaches this size
        backup_count: Number of rotated files to keep
        console_output: Also mirror log records to stderr
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation=f"{max_file_size_mb} MB",
        retention=backup_count,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,  # Synchronous writes
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to the log file AND prints to the console.

    Use this instead of print() for user-facing messages that should also be logged.

    Args:
        message: User-facing message (may contain rich markup)
        level: Log level (debug, info, success, warning, error)
    """
    log_func = getattr(logger, level, logger.info)
    log_func(message)

    get_console().print(message, style=LEVEL_STYLES.get(level, "white"))
