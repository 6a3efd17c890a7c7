"""Utilities shared by entry points."""

from src.tiletrace.utils.logconfig import DEFAULT_FORMAT, PACKAGE_LOGGER, setup_logging

__all__ = [
    "DEFAULT_FORMAT",
    "PACKAGE_LOGGER",
    "setup_logging",
]
