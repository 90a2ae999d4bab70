"""Logging setup for graph_cloner.

The library logs under the `graph_cloner` namespace and never installs
handlers on its own. Applications that want to see the debug output call
`configure_logging()` once at start-up.

Example:
    >>> import logging
    >>> from graph_cloner.util.logging_config import configure_logging
    >>> configure_logging(logging.DEBUG)
"""

from __future__ import annotations

import logging

LOGGER_NAME = "graph_cloner"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get the package logger, or a child logger such as `graph_cloner.pattern`."""
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(
    level: int = logging.WARNING,
    handler: logging.Handler | None = None,
    format_string: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach a handler to the package logger and set its level.

    Args:
        level: Level for the `graph_cloner` logger.
        handler: Handler to attach. Defaults to a `StreamHandler` using `format_string`.
        format_string: Format used when no handler is supplied.

    Returns:
        The configured `graph_cloner` logger.
    """
    logger = get_logger()
    logger.setLevel(level)
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)
    return logger
