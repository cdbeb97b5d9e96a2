"""
Logging Configuration
=====================
Every module of the package logs to a child of the `wirerouting` logger
(`wirerouting.routing.orderer`, `wirerouting.model.room`, ...). The host
add-in calls `setup_logging` once when it loads; afterwards boundary
ordering gaps show up as warnings and rejected picks as errors, next to
the host's own output or in a per-session log file.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "wirerouting"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Routes the package's log records to stdout and, optionally, a file.

    Args:
        level: Logging level. DEBUG also reports every located segment and
            junction count; INFO reports one line per routed wire.
        log_file: Optional path of a session log. It is overwritten on
            each call.

    Returns:
        The `wirerouting` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # The host may load the add-in more than once per session
    if logger.hasHandlers():
        logger.handlers.clear()

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode='w', encoding='utf-8'), level)

    logger.info("Logging initialized.")
    return logger
