"""Logging utilities for the tool chain library."""

import logging
import sys

_LOGGER_NAME = "tool_chain_lib"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance for the library.

    Args:
        name: Optional sub-logger name. If None, returns the root library logger.

    Returns:
        The requested logger.
    """
    if name:
        # Module loggers pass __name__, which already carries the prefix
        if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
            return logging.getLogger(name)
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def setup_logging(
    level: int = logging.INFO, format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
) -> None:
    """Attach a stdout handler to the library's root logger.

    Meant for scripts and examples. Applications embedding the library should
    configure logging themselves.

    Args:
        level: Logging level.
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)

    # Called twice -> keep a single handler
    if logger.handlers and not all(isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)
    logger.setLevel(level)


logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
