# -*- coding: utf-8 -*-
"""Logger helpers shared by every petdoku module."""
import logging
import os
import sys
from typing import Optional

from petdoku.common.constants import LOG_LEVEL_ENV_VAR

_LOG_FORMAT = "[%(levelname)s %(asctime)s %(filename)s:%(lineno)d] %(message)s"
_LOG_DATE_FORMAT = "%m-%d %H:%M:%S"
_ROOT_LOGGER_NAME = "petdoku"


class NewLineFormatter(logging.Formatter):
    """Adds the logging prefix to every line of a multi-line message."""

    def __init__(self, fmt, datefmt=None):
        logging.Formatter.__init__(self, fmt, datefmt)

    def format(self, record):
        msg = logging.Formatter.format(self, record)
        if record.message != "":
            parts = msg.split(record.message)
            msg = msg.replace("\n", "\r\n" + parts[0])
        return msg


def _default_level() -> int:
    level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    try:
        return _resolve_level(level)
    except ValueError:
        logging.getLogger(_ROOT_LOGGER_NAME).warning(
            f"Ignoring invalid {LOG_LEVEL_ENV_VAR}={level!r}, using INFO."
        )
        return logging.INFO


def _resolve_level(level) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def get_logger(name: Optional[str] = None, level: Optional[int] = None) -> logging.Logger:
    """Get a logger under the `petdoku` namespace.

    Args:
        name (`Optional[str]`): The logger name. Module names outside the
            `petdoku` package are nested under it.
        level (`Optional[int]`): The log level. Defaults to the value of the
            `PETDOKU_LOG_LEVEL` environment variable, or INFO.

    Returns:
        `logging.Logger`: The configured logger.
    """
    if name is None or name == _ROOT_LOGGER_NAME:
        logger_name = _ROOT_LOGGER_NAME
    elif name.startswith(_ROOT_LOGGER_NAME + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT_LOGGER_NAME}.{name}"

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(NewLineFormatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        root.setLevel(_default_level())

    logger = logging.getLogger(logger_name)
    if level is not None:
        logger.setLevel(_resolve_level(level))
    return logger
