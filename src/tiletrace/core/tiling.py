"""Image tiling for parallel rendering.

The image grid is split into square tiles of a fixed edge length, the unit
of work handed to each render worker. Tiles are generated row by row; tiles
on the right and bottom edges are shrunk to the image boundary rather than
padded, so the tiles of an image cover ``[0, width) x [0, height)`` exactly
once.

A 39x19 image with 16-pixel tiles, for example, yields six tiles:

    x: [0,16) [16,32) [32,39)     y: [0,16)
    x: [0,16) [16,32) [32,39)     y: [16,19)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Edge length (in pixels) of a full tile, following pbrt's 16x16 tiles
DEFAULT_TILE_SIZE = 16


@dataclass(frozen=True, slots=True)
class Tile:
    """A half-open rectangular pixel range ``[x_start, x_end) x [y_start, y_end)``."""

    x_start: int
    x_end: int
    y_start: int
    y_end: int

    @property
    def width(self) -> int:
        return self.x_end - self.x_start

    @property
    def height(self) -> int:
        return self.y_end - self.y_start

    @property
    def area(self) -> int:
        return self.width * self.height

    def pixels(self) -> Iterator[tuple[int, int]]:
        """Iterate over the global (x, y) coordinates covered by the tile, row by row."""
        for y in range(self.y_start, self.y_end):
            for x in range(self.x_start, self.x_end):
                yield x, y


def generate_tiles(width: int, height: int, tile_size: int = DEFAULT_TILE_SIZE) -> list[Tile]:
    """Partition a ``width x height`` image into tiles.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        tile_size: Edge length of a full tile.

    Returns:
        Tiles in row-major order. Empty when either dimension is zero.

    Raises:
        ValueError: If tile_size is not positive or a dimension is negative.
    """
    if tile_size <= 0:
        raise ValueError(f"Tile size must be positive, got {tile_size}")
    if width < 0 or height < 0:
        raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")

    tiles = []
    for y_start in range(0, height, tile_size):
        for x_start in range(0, width, tile_size):
            tiles.append(
                Tile(
                    x_start=x_start,
                    x_end=min(x_start + tile_size, width),
                    y_start=y_start,
                    y_end=min(y_start + tile_size, height),
                )
            )
    return tiles


@dataclass
class Batch:
    """Per-tile color buffer produced by one worker.

    The buffer always has the full tile area ``(tile_size, tile_size, 3)``;
    only the top-left ``tile.height x tile.width`` region is meaningful for
    boundary tiles. Pixel (x, y) of the image lives at
    ``colors[y - tile.y_start, x - tile.x_start]``.

    Attributes:
        tile: The tile this batch covers.
        colors: Float32 RGB buffer, unclamped.
    """

    tile: Tile
    colors: npt.NDArray[np.float32]

    @classmethod
    def empty(cls, tile: Tile, tile_size: int = DEFAULT_TILE_SIZE) -> Batch:
        """Create a black batch for a tile.

        Raises:
            ValueError: If the tile is larger than ``tile_size``.
        """
        if tile.width > tile_size or tile.height > tile_size:
            raise ValueError(f"{tile} does not fit in a {tile_size}x{tile_size} batch")
        return cls(tile=tile, colors=np.zeros((tile_size, tile_size, 3), dtype=np.float32))

    def region(self) -> npt.NDArray[np.float32]:
        """View of the buffer restricted to the tile's own pixels."""
        return self.colors[: self.tile.height, : self.tile.width]
