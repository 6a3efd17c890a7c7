"""Core rendering module.

This module contains the fundamental building blocks of the tracer:

Components:
    vector: Immutable 2/3/4-tuples; points (w=1) and vectors (w=0)
    matrix: 2x2, 3x3 and 4x4 matrices with cofactor inversion
    transform: Affine transform constructors and the view transform
    ray: Ray data structure
    color: RGB colors
    tiling: Tile partitioning and per-tile batch buffers
    errors: Exception hierarchy
    integrator: Per-pixel tracing and per-tile rendering
    renderer: The tile-parallel renderer
"""

from .color import BLACK, WHITE, Color
from .errors import (
    NotAVectorError,
    RenderCancelled,
    SingularMatrixError,
    SubmatrixIndexError,
    TiletraceError,
)
from .matrix import Matrix2, Matrix3, Matrix4
from .ray import Ray
from .tiling import DEFAULT_TILE_SIZE, Batch, Tile, generate_tiles
from .transform import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .vector import EPSILON, Tuple2, Tuple3, Tuple4, approx_equal

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.tiletrace.core.integrator or src.tiletrace.core.renderer.
#
# For rendering, use:
#   from src.tiletrace.core.renderer import RenderConfig, TileRenderer

__all__ = [
    # Vectors
    "EPSILON",
    "Tuple2",
    "Tuple3",
    "Tuple4",
    "approx_equal",
    # Matrices
    "Matrix2",
    "Matrix3",
    "Matrix4",
    # Transforms
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "chain",
    "view_transform",
    # Rays and colors
    "Ray",
    "Color",
    "BLACK",
    "WHITE",
    # Tiling
    "DEFAULT_TILE_SIZE",
    "Tile",
    "Batch",
    "generate_tiles",
    # Errors
    "TiletraceError",
    "NotAVectorError",
    "SubmatrixIndexError",
    "SingularMatrixError",
    "RenderCancelled",
]
