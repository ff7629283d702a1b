"""
Logging configuration using loguru.
"""

from pathlib import Path
from loguru import logger
import sys

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

# (file name, level, retention)
FILE_SINKS = [
    ("hisendesk.log", "DEBUG", "30 days"),
    ("hisendesk_errors.log", "ERROR", "90 days"),
]


def setup_logging(log_dir: Path, verbose: bool = False) -> logger:
    """
    Setup application logging.

    The console only shows warnings unless verbose, since query results are
    rendered by the CLI itself. Files always get the full DEBUG trail.

    Args:
        log_dir: Directory for log files
        verbose: Enable verbose logging

    Returns:
        Configured logger instance
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format=CONSOLE_FORMAT,
    )

    log_files = []
    for file_name, level, retention in FILE_SINKS:
        log_file = log_dir / file_name
        logger.add(
            log_file,
            rotation="10 MB",
            retention=retention,
            level=level,
            format=FILE_FORMAT,
        )
        log_files.append(str(log_file))

    logger.info("Logging initialized")
    logger.debug(f"Log files: {', '.join(log_files)}")

    return logger
