"""
Logging for hemiwire.

Every module logs through ``logging.getLogger(__name__)``, so all records
land under the ``hemiwire`` logger configured here. The mesh builder and
``create_animator`` report the scene they built at INFO; noise seeding is
logged at DEBUG. The viewer calls ``setup_logging`` once before the Qt
application starts, and per-frame work stays silent.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "hemiwire"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Send hemiwire's records to stdout and, optionally, to ``log_file``.

    Calling it again replaces the handlers from the previous call, so the
    viewer can be restarted in one process without doubled output.

    Args:
        level: threshold for the package logger and its handlers.
        log_file: path of a log written from scratch on each run.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode='w', encoding='utf-8'), level)

    logger.info("hemiwire logging at %s", logging.getLevelName(level))
    return logger
