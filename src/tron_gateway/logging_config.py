"""
Logging for the tron_gateway package logger
"""

import logging
import sys
from typing import IO, Optional, Union

from tron_gateway.exceptions import ConfigurationError

PACKAGE_LOGGER = "tron_gateway"

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s (%(filename)s:%(lineno)d)"


class _GatewayHandler(logging.StreamHandler):
    """Marks the handler setup_logging owns, so re-running it replaces only that one"""


def resolve_level(level: Union[int, str]) -> int:
    """Map "debug"/"INFO"/20 to a logging level number"""
    if isinstance(level, bool):
        raise ConfigurationError(f"Invalid log level: {level!r}")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ConfigurationError(f"Invalid log level: {level!r}")
    return value


def setup_logging(
    level: Union[int, str] = logging.INFO, stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Send tron_gateway log records to a stream (stdout by default).

    Only the package logger is touched, so an application's own root
    configuration stays as it was.

    Args:
        level: Level number or name, e.g. "DEBUG"
        stream: Output stream

    Returns:
        The package logger
    """
    numeric_level = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    for handler in logger.handlers[:]:
        if isinstance(handler, _GatewayHandler):
            logger.removeHandler(handler)

    handler = _GatewayHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
