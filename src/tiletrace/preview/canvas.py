"""Canvas: the final merged image, plus plain PPM export.

The canvas stores unclamped linear colors in a ``(height, width, 3)``
float32 array; pixel (x, y) lives at ``pixels[y, x]``. Values above 1.0 are
kept so that tone mapping can be applied later; they are only clamped when
the canvas is quantized for output.

PPM output follows the plain (ASCII, ``P3``) format:

    P3
    <width> <height>
    255
    <channel values, at most 70 characters per line>

Every channel is scaled by 255, rounded and clamped to ``[0, 255]``. Each
image row starts on a new line, and long rows are wrapped at whitespace so
no line exceeds 70 characters. The file ends with a newline.

Example:
    >>> from src.tiletrace.preview.canvas import Canvas
    >>> from src.tiletrace.core.color import Color
    >>> canvas = Canvas(5, 3)
    >>> canvas.write_pixel(0, 0, Color(1.5, 0.0, 0.0))
    >>> canvas.to_ppm().splitlines()[3]
    '255 0 0 0 0 0 0 0 0 0 0 0 0 0 0'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import numpy as np
import numpy.typing as npt

from src.tiletrace.core.color import BLACK, Color
from src.tiletrace.core.tiling import Batch

logger = logging.getLogger(__name__)

PPM_MAX_VALUE = 255
PPM_MAX_LINE_LENGTH = 70


class Canvas:
    """A width x height grid of unclamped RGB colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Float32 array of shape (height, width, 3).
    """

    def __init__(self, width: int, height: int, background: Color = BLACK) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Canvas dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.float32] = np.zeros((height, width, 3), dtype=np.float32)
        if background != BLACK:
            self.pixels[:] = background.as_tuple()

    @classmethod
    def from_batches(
        cls,
        width: int,
        height: int,
        batches: Iterable[Batch],
        background: Color = BLACK,
    ) -> Canvas:
        """Merge per-tile batches into a new canvas.

        Each batch is copied into the canvas region its tile covers. The
        result depends only on the tiles' coordinates, never on the order in
        which the batches are supplied.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            batches: Batches whose tiles lie within the image.
            background: Color of pixels no batch covers.

        Returns:
            The merged canvas.

        Raises:
            ValueError: If a batch's tile lies outside the image.
        """
        canvas = cls(width, height, background)
        for batch in batches:
            tile = batch.tile
            if tile.x_end > width or tile.y_end > height or tile.x_start < 0 or tile.y_start < 0:
                raise ValueError(f"{tile} lies outside a {width}x{height} image")
            canvas.pixels[tile.y_start : tile.y_end, tile.x_start : tile.x_end] = batch.region()
        return canvas

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set pixel (x, y). Raises IndexError outside the canvas."""
        self._check_bounds(x, y)
        self.pixels[y, x] = color.as_tuple()

    def pixel_at(self, x: int, y: int) -> Color:
        """Read pixel (x, y). Raises IndexError outside the canvas."""
        self._check_bounds(x, y)
        r, g, b = (float(c) for c in self.pixels[y, x])
        return Color(r, g, b)

    def _check_bounds(self, x: int, y: int) -> None:
        # Reject negative indices, which numpy would otherwise wrap around
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return a copy of the linear image, shape (height, width, 3)."""
        return self.pixels.copy()

    # =========================================================================
    # PPM export
    # =========================================================================

    def to_channels(self) -> npt.NDArray[np.int64]:
        """Quantize to integer channels in ``[0, 255]``, rounding half up."""
        scaled = np.floor(self.pixels.astype(np.float64) * PPM_MAX_VALUE + 0.5)
        return np.clip(scaled, 0, PPM_MAX_VALUE).astype(np.int64)

    def to_ppm(self) -> str:
        """Render the canvas as a plain PPM (P3) document."""
        lines = ["P3", f"{self.width} {self.height}", str(PPM_MAX_VALUE)]
        channels = self.to_channels()
        for row in channels:
            lines.extend(_wrap_values(str(value) for value in row.ravel()))
        return "\n".join(lines) + "\n"

    def save_ppm(self, filepath: str | Path) -> None:
        """Write the canvas to a plain PPM file."""
        filepath = Path(filepath)
        filepath.write_text(self.to_ppm(), encoding="ascii")
        logger.info("Saved PPM to %s", filepath)


def _wrap_values(values: Iterable[str]) -> list[str]:
    """Join values with spaces, breaking lines before they exceed the limit."""
    lines: list[str] = []
    current = ""
    for value in values:
        if not current:
            current = value
        elif len(current) + 1 + len(value) <= PPM_MAX_LINE_LENGTH:
            current += " " + value
        else:
            lines.append(current)
            current = value
    if current:
        lines.append(current)
    return lines
