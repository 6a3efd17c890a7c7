"""Logging setup for the package logger hierarchy.

Every module logs through ``logging.getLogger(__name__)``, so configuring the
``src.tiletrace`` logger configures the whole package. Library code never
calls this; entry points such as ``examples/render_demo.py`` do.
"""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "src.tiletrace"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    name: str = PACKAGE_LOGGER,
    level: int | str = logging.WARNING,
    log_format: str = DEFAULT_FORMAT,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Attach stream (and optionally file) handlers to a logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        name: Logger name. Defaults to the package root logger.
        level: Level as an int or a name such as "DEBUG".
        log_format: Format string for every handler.
        log_file: Optional path of a file to log to as well.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger
