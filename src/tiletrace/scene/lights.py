"""Light sources."""

from __future__ import annotations

from dataclasses import dataclass

from src.tiletrace.core.color import Color
from src.tiletrace.core.vector import Tuple4


@dataclass(frozen=True, slots=True)
class PointLight:
    """A point light with no size.

    Attributes:
        position: World-space position of the light (a point).
        intensity: Color and brightness of the light; channels may exceed 1.0.
    """

    position: Tuple4
    intensity: Color

    def __post_init__(self) -> None:
        if not self.position.is_point():
            raise ValueError(f"Light position must be a point, got {self.position}")
