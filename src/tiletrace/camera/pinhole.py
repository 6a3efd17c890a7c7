"""Pinhole camera model for primary ray generation.

The camera maps every pixel of a ``width x height`` image onto a view plane
one unit in front of the eye (at z = -1 in camera space). The plane's
extent comes from the field of view and the aspect ratio:

- ``half_view = tan(field_of_view / 2)``
- aspect >= 1 (landscape): ``half_width = half_view``,
  ``half_height = half_view / aspect``
- aspect < 1 (portrait): ``half_width = half_view * aspect``,
  ``half_height = half_view``
- ``pixel_size = 2 * half_width / width``

The camera transform is the world-to-camera orientation (see
``core.transform.view_transform``); ray generation applies its inverse to
move the pixel point and the eye into world space.

Example:
    >>> import math
    >>> from src.tiletrace.camera.pinhole import Camera
    >>> from src.tiletrace.core.vector import Tuple4, approx_equal
    >>> camera = Camera(201, 101, math.pi / 2)
    >>> ray = camera.ray_for_pixel(100, 50)
    >>> approx_equal(ray.direction, Tuple4.vector(0.0, 0.0, -1.0))
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from src.tiletrace.core.matrix import Matrix4
from src.tiletrace.core.ray import Ray
from src.tiletrace.core.vector import Tuple4

# =============================================================================
# Camera
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """A pinhole camera. Immutable once constructed.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        field_of_view: Angle of view in radians, measured across the longer
            image side.
        transform: World-to-camera transform. Defaults to identity (eye at
            the origin looking down -z).
        half_width: Half the view-plane width (derived).
        half_height: Half the view-plane height (derived).
        pixel_size: World-space size of one pixel on the view plane (derived).
    """

    width: int
    height: int
    field_of_view: float
    transform: Matrix4 = field(default_factory=Matrix4.identity)
    half_width: float = field(init=False)
    half_height: float = field(init=False)
    pixel_size: float = field(init=False)
    _inverse_transform: Matrix4 = field(init=False, repr=False, compare=False)
    _origin: Tuple4 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Camera dimensions must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {self.field_of_view}")

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.width / self.height
        if aspect >= 1.0:
            half_width, half_height = half_view, half_view / aspect
        else:
            half_width, half_height = half_view * aspect, half_view

        # SingularMatrixError propagates: a camera without an inverse cannot render
        inverse = self.transform.inverse()

        object.__setattr__(self, "half_width", half_width)
        object.__setattr__(self, "half_height", half_height)
        object.__setattr__(self, "pixel_size", (half_width * 2.0) / self.width)
        object.__setattr__(self, "_inverse_transform", inverse)
        object.__setattr__(self, "_origin", inverse * Tuple4.point(0.0, 0.0, 0.0))

    @property
    def origin(self) -> Tuple4:
        """The eye position in world space."""
        return self._origin

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Generate the primary ray through the centre of pixel (x, y).

        Pixel (0, 0) is the top-left corner of the image; x grows to the
        right and y grows downwards.

        Args:
            x: Pixel column in ``[0, width)``.
            y: Pixel row in ``[0, height)``.

        Returns:
            A world-space ray from the eye with a normalized direction.
        """
        x_offset = (x + 0.5) * self.pixel_size
        y_offset = (y + 0.5) * self.pixel_size
        # The camera looks down -z, so +x in camera space is to the left
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self._inverse_transform * Tuple4.point(world_x, world_y, -1.0)
        direction = (pixel - self._origin).normalize()
        return Ray(self._origin, direction)
