"""Centralized logging configuration for the authtrees project."""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "authtrees"
DEFAULT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
TEST_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def _owns_handlers(logger: logging.Logger) -> bool:
    # Only handlers attached to this logger count; ancestors (e.g. a root
    # logger set up by basicConfig or pytest) are ignored.
    return bool(logger.handlers)


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler_type: str = "stream",
    filename: Optional[str] = None,
) -> logging.Logger:
    """
    Attach handlers to the ``authtrees`` logger and stop propagation.

    Calling it again once the logger has its own handlers returns the
    logger unchanged.

    Args:
        level: Logging level (default: INFO)
        format_string: Custom format string (optional)
        handler_type: "stream", "file", or "both"
        filename: Log file used by the "file" and "both" handler types

    Returns:
        The ``authtrees`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _owns_handlers(logger):
        return logger

    if handler_type in ("file", "both") and filename is None:
        raise ValueError(f"handler_type={handler_type!r} requires a filename")

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handlers = []
    if handler_type in ("stream", "both"):
        handlers.append(logging.StreamHandler(sys.stdout))
    if handler_type in ("file", "both"):
        handlers.append(logging.FileHandler(filename))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger under ``authtrees``; configures the project logger on first use."""
    setup_logging()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_test_logger(name: str) -> logging.Logger:
    """DEBUG-level ``Tests.<name>`` logger with its own stream handler."""
    logger = logging.getLogger(f"Tests.{name}")
    if not _owns_handlers(logger):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(TEST_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
    return logger
