"""
Logging configuration using loguru.

Log files live under the configured log directory:

- ``netutil.log``: everything at INFO (DEBUG with ``--verbose``)
- ``netutil_errors.log``: errors only, kept longer

The dashboard owns the terminal while it runs, so only the one-shot
subcommands (``netutil list``, ``netutil dns``) also log to stderr.
"""

import sys
from pathlib import Path

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"

MAIN_LOG = "netutil.log"
ERROR_LOG = "netutil_errors.log"


def setup_logging(log_dir: Path, verbose: bool = False, console: bool = False) -> logger:
    """
    Setup application logging.

    Args:
        log_dir: Directory for log files (must exist)
        verbose: Log DEBUG records instead of INFO
        console: Also log warnings (or everything when verbose) to stderr

    Returns:
        Configured logger instance
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"

    if console:
        logger.add(sys.stderr, level=level if verbose else "WARNING", format=CONSOLE_FORMAT)

    main_log = log_dir / MAIN_LOG
    logger.add(main_log, rotation="10 MB", retention="30 days", level=level, format=FILE_FORMAT)

    error_log = log_dir / ERROR_LOG
    logger.add(error_log, rotation="10 MB", retention="90 days", level="ERROR", format=FILE_FORMAT)

    logger.info("Logging initialized")
    logger.debug(f"Log files: {main_log}, {error_log}")

    return logger
