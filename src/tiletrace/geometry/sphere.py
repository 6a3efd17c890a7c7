"""Sphere primitive: ray/sphere intersection and surface normals.

The sphere lives in object space, centred on its position and sized by its
radius (1.0 by convention); scaling, rotation and placement come from the
object's affine transform. World-space rays are carried into object space
with the inverse transform, so the quadratic is always solved against the
untransformed sphere:

    |origin + t * direction - center|^2 = radius^2

    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - radius^2

Normals are mapped back to world space with the inverse-transpose of the
transform, which keeps them perpendicular to the surface under non-uniform
scaling.

Example:
    >>> from src.tiletrace.core.matrix import Matrix4
    >>> from src.tiletrace.core.ray import Ray
    >>> from src.tiletrace.core.vector import Tuple4
    >>> ray = Ray(Tuple4.point(0.0, 0.0, -5.0), Tuple4.vector(0.0, 0.0, 1.0))
    >>> intersect_sphere(ray, Tuple4.point(0.0, 0.0, 0.0), 1.0, Matrix4.identity())
    [4.0, 6.0]
"""

from __future__ import annotations

import logging
import math

from src.tiletrace.core.errors import SingularMatrixError
from src.tiletrace.core.matrix import Matrix4
from src.tiletrace.core.ray import Ray
from src.tiletrace.core.vector import Tuple4

logger = logging.getLogger(__name__)


def intersect_sphere(
    ray: Ray,
    center: Tuple4,
    radius: float,
    transform: Matrix4,
) -> list[float]:
    """Intersect a world-space ray with a transformed sphere.

    Args:
        ray: The world-space ray.
        center: The sphere centre in object space (a point).
        radius: The sphere radius in object space.
        transform: The object-to-world transform of the sphere.

    Returns:
        The two roots ``[t1, t2]`` with ``t1 <= t2`` (equal for a tangent
        ray, negative when the sphere is behind the ray origin), or an empty
        list when the ray misses. A sphere whose transform is singular is
        not intersectable and also yields an empty list.
    """
    try:
        inverse = transform.inverse()
    except SingularMatrixError:
        logger.debug("Skipping sphere at %s: transform is not invertible", center)
        return []

    local_ray = ray.transform(inverse)
    direction = local_ray.direction
    center_to_origin = local_ray.origin - center

    a = direction.dot(direction)
    b = 2.0 * direction.dot(center_to_origin)
    c = center_to_origin.dot(center_to_origin) - radius * radius
    discriminant = b * b - 4.0 * a * c

    if discriminant < 0.0:
        return []

    sqrt_discriminant = math.sqrt(discriminant)
    inv_denominator = 1.0 / (2.0 * a)
    t1 = (-b - sqrt_discriminant) * inv_denominator
    t2 = (-b + sqrt_discriminant) * inv_denominator
    return [t1, t2]


def sphere_normal_at(point: Tuple4, center: Tuple4, transform: Matrix4) -> Tuple4:
    """Compute the world-space surface normal at a point on the sphere.

    Args:
        point: A world-space point on the sphere surface.
        center: The sphere centre in object space.
        transform: The object-to-world transform of the sphere.

    Returns:
        The unit normal vector (w = 0) pointing away from the centre.

    Raises:
        SingularMatrixError: If the transform is not invertible. Callers
            only ask for normals of spheres that were hit, whose transforms
            are invertible by construction.
    """
    object_normal = transform.inverse() * point - center
    world_normal = transform.normal_matrix() * object_normal
    return world_normal.with_w(0.0).normalize()
