# presetmarket/logging_setup.py
import logging
import sys

from .config import LOG_LEVEL

_LEVEL_MAP = {
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def _build_formatter() -> logging.Formatter:
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    return logging.Formatter(fmt, datefmt)


def get_logger(name: str = "presetmarket") -> logging.Logger:
    """Return the package logger, attaching a stderr handler once.

    Module loggers (``logging.getLogger(__name__)``) propagate to it.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    level = _LEVEL_MAP.get(str(LOG_LEVEL).upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_build_formatter())
    logger.addHandler(handler)
    return logger
