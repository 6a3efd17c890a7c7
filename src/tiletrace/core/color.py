"""Floating-point RGB colors.

Colors are unclamped while shading; clamping and quantization to 8-bit
channels happen only in the image sink (see ``to_channels``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.tiletrace.core.vector import EPSILON


@dataclass(frozen=True, slots=True)
class Color:
    """An RGB color with float channels.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float
    g: float
    b: float

    def __add__(self, other: object) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: object) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other: object) -> Color:
        # Hadamard (Schur) product for colors, plain scaling for scalars
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, (int, float)):
            return Color(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    def __rmul__(self, other: object) -> Color:
        if isinstance(other, (int, float)):
            return self.__mul__(other)
        return NotImplemented

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def to_channels(self) -> tuple[int, int, int]:
        """Quantize to 8-bit channels, rounding half up and clamping to [0, 255].

        Returns:
            Tuple of (r, g, b) integers in [0, 255].
        """
        return tuple(  # type: ignore[return-value]
            min(255, max(0, math.floor(c * 255.0 + 0.5))) for c in (self.r, self.g, self.b)
        )

    def approx_equal(self, other: Color, epsilon: float = EPSILON) -> bool:
        return (
            abs(self.r - other.r) < epsilon
            and abs(self.g - other.g) < epsilon
            and abs(self.b - other.b) < epsilon
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
