"""Package-wide logger."""
import logging
import sys
from typing import Union


LOGGER_NAME = "infix_calculator"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(processName)s | %(message)s"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """
    Attach a single stream handler to the package logger and set its level.

    Calling it again only updates the level, handlers are never duplicated.

    :param level: Logging level name or number

    :return: The configured package logger
    :rtype: logging.Logger
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        # Keep our records out of the root logger of embedding applications
        logger.propagate = False

    return logger
