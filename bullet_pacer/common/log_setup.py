"""Logging configuration shared by the Qt shell and the command-line tools."""

import logging
import os

LOGLEVEL_ENV_VAR = "BULLET_PACER_LOGLEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def setup_logging(name: str = "bullet_pacer", default_level: str = "INFO") -> logging.Logger:
    """Configure the named package logger.

    The level comes from ``BULLET_PACER_LOGLEVEL`` (e.g. DEBUG to see every
    completed move), falling back to ``default_level``. Calling this twice
    does not stack handlers.
    """
    level_name = os.environ.get(LOGLEVEL_ENV_VAR, default_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)

    return logger
