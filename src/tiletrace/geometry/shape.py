"""Shape variants and tag-dispatched intersection.

Shapes form a closed set identified by ShapeType. Each variant provides
two capabilities, intersection and surface normal, and the dispatch
functions below select the implementation by matching on the tag. Adding
a primitive means adding a tag, its parameters and one branch in each
dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from src.tiletrace.core.matrix import Matrix4
from src.tiletrace.core.ray import Ray
from src.tiletrace.core.vector import Tuple4
from src.tiletrace.geometry.sphere import intersect_sphere, sphere_normal_at


class ShapeType(IntEnum):
    """Enumeration of supported primitive shapes."""

    SPHERE = 0


@dataclass(frozen=True, slots=True)
class Shape:
    """A primitive shape in object space.

    Attributes:
        shape_type: The variant tag used for dispatch.
        radius: Sphere radius in object space (1.0 for the unit sphere).
    """

    shape_type: ShapeType
    radius: float = 1.0

    def __post_init__(self) -> None:
        if self.shape_type == ShapeType.SPHERE and self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    @classmethod
    def sphere(cls, radius: float = 1.0) -> Shape:
        return cls(ShapeType.SPHERE, radius)


def intersect_shape(ray: Ray, position: Tuple4, shape: Shape, transform: Matrix4) -> list[float]:
    """Intersect a world-space ray with any supported shape.

    Args:
        ray: The world-space ray.
        position: The shape's object-space centre.
        shape: The shape variant and its parameters.
        transform: The object-to-world transform.

    Returns:
        The parametric distances of all intersections, in ascending order.
        Empty if the ray misses or the object cannot be intersected.

    Raises:
        ValueError: If the shape tag is not supported.
    """
    if shape.shape_type == ShapeType.SPHERE:
        return intersect_sphere(ray, position, shape.radius, transform)
    raise ValueError(f"Unsupported shape type: {shape.shape_type!r}")


def shape_normal_at(point: Tuple4, position: Tuple4, shape: Shape, transform: Matrix4) -> Tuple4:
    """Compute the world-space unit normal of a shape at a surface point.

    Raises:
        ValueError: If the shape tag is not supported.
    """
    if shape.shape_type == ShapeType.SPHERE:
        return sphere_normal_at(point, position, transform)
    raise ValueError(f"Unsupported shape type: {shape.shape_type!r}")
