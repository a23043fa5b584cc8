"""Logging configuration for the wmd command line"""

import logging
import sys


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the package logger once and return it.

    Module loggers (``wmd.core.pipeline`` etc.) propagate here, so the level
    set on the CLI applies to every stage.
    """
    logger = logging.getLogger("wmd")
    logger.setLevel(level.upper())
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
