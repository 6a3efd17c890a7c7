"""Ray data structure.

A ray is the parametric line ``origin + t * direction``. Rays are immutable;
transforming a ray returns a new one, which is how world-space rays are
carried into an object's local space before intersection.

Example:
    >>> from src.tiletrace.core.ray import Ray
    >>> from src.tiletrace.core.vector import Tuple4
    >>> ray = Ray(Tuple4.point(0.0, 0.0, -5.0), Tuple4.vector(0.0, 0.0, 1.0))
    >>> ray.position(5.0)
    Tuple4(x=0.0, y=0.0, z=0.0, w=1.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.tiletrace.core.matrix import Matrix4
from src.tiletrace.core.vector import Tuple4


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (w = 1).
        direction: The direction of the ray (w = 0). Primary rays from the
            camera are normalized; rays carried into object space by a
            scaling transform generally are not, and the intersector does
            not require them to be.
    """

    origin: Tuple4
    direction: Tuple4

    def position(self, t: float) -> Tuple4:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point ``origin + direction * t``.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix4) -> Ray:
        """Apply an affine transform to both origin and direction.

        Args:
            matrix: The transform to apply.

        Returns:
            A new Ray ``{matrix * origin, matrix * direction}``.
        """
        return Ray(matrix * self.origin, matrix * self.direction)
