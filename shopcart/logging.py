"""
Logging setup for shopcart.

The root logger gets one stdout handler the first time this module is
imported, unless the host application already configured one. Modules then
take their logger from `get_logger(__name__)`.

Environment:
    LOG_LEVEL   level name, INFO when unset or unknown
    LOG_FORMAT  "simple" drops the timestamp column
"""

import logging
import os
import sys
from functools import cache
from typing import Optional, TextIO

_TIMESTAMPED = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Line breaks and tabs in user-supplied values could forge extra log records
_UNSAFE_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})

# Chatty per-request loggers of the inventory HTTP client
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> bool:
    """
    Attach the shopcart handler to the root logger.

    Returns False and changes nothing when the root logger already has
    handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    simple = os.environ.get("LOG_FORMAT", "").lower() == "simple"
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(_SIMPLE if simple else _TIMESTAMPED))
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return True


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _loggable(value: object, max_length: int, suffix: str) -> str:
    if value is None or value == "":
        return "N/A"
    text = str(value).translate(_UNSAFE_CHARS)
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix


def sanitize_id_for_logging(product_id: object) -> str:
    """Product id as it appears in log lines; caller input may be any type."""
    return _loggable(product_id, max_length=12, suffix="")


def sanitize_string_for_logging(value: Optional[str], max_length: int = 50) -> str:
    """Free-form text with control characters escaped, cut at max_length."""
    return _loggable(value, max_length=max_length, suffix="...")


__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
