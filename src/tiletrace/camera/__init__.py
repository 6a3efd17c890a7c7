"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera mapping pixel centres to world-space rays
"""

from .pinhole import Camera

__all__ = ["Camera"]
