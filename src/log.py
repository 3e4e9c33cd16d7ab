"""Log utilities."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from constants import DEFAULT_LOG_LEVEL, ENVIRONMENT_REPORT_LOG_LEVEL_ENV_VAR


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for Rich console output on standard error.

    The returned logger has its level set based on the
    ENVIRONMENT_REPORT_LOG_LEVEL environment variable (defaults to WARNING),
    its handlers replaced with a single RichHandler writing to stderr, and
    propagation to ancestor loggers disabled. Standard output is reserved
    for the JSON report.

    Parameters:
        name (str): Name of the logger to retrieve or create.

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)

    # Skip reconfiguration if logger already has a RichHandler from a prior call
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return logger

    logger.handlers = [RichHandler(console=Console(stderr=True))]
    logger.propagate = False

    level_str = os.environ.get(ENVIRONMENT_REPORT_LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)

    validated_level = getattr(logging, level_str.upper(), None)
    if not isinstance(validated_level, int):
        logger.setLevel(logging.WARNING)
        logger.warning(
            "Invalid log level '%s', falling back to %s",
            level_str,
            DEFAULT_LOG_LEVEL,
        )
        validated_level = getattr(logging, DEFAULT_LOG_LEVEL)

    logger.setLevel(validated_level)
    return logger
