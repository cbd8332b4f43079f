"""
Unified output system using Loguru.
Replaces print() statements and stdlib logging with dual output (console + file).
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def get_log_file_path() -> Path:
    """Get the default path to the log file."""
    return get_data_dir() / "radio-player.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = False,
) -> Path:
    """
    Configure loguru for file logging, optionally mirrored to stderr.

    The Textual UI owns the terminal, so console output stays off unless
    explicitly requested (e.g. when running the backend server).

    Args:
        log_file: Path to log file (default: data dir)
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Also log to stderr

    Returns:
        The log file path in use
    """
    log_file = log_file or get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format=LOG_FORMAT,
        enqueue=False,
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")
    return log_file


def setup_from_config(logging_config: LoggingConfig, console_output: bool = False) -> Path:
    """Configure loguru from the [logging] config section."""
    log_file = Path(logging_config.log_file) if logging_config.log_file else None
    return setup_loguru(
        log_file=log_file,
        level=logging_config.level,
        console_output=console_output or logging_config.console_output,
    )


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND prints to the terminal.

    Use this instead of print() for user-facing CLI messages that should also be logged.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error); warnings and errors go to stderr
    """
    log_func = getattr(logger, level)
    log_func(message)
    print(message, file=sys.stderr if level in ("warning", "error") else sys.stdout)
