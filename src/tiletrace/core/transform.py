"""Builders for affine transforms.

Each builder returns a Matrix4. Composition is left-multiplication, so a
chain "scale, then rotate, then translate" is written
``translation(...) * rotation_y(...) * scaling(...)``, or equivalently
``chain(scaling(...), rotation_y(...), translation(...))`` which lists
the steps in application order.

Rotations take angles in radians and follow the left-handed convention
of the tracer's coordinate system (y up, camera looking down -z by default).
"""

from __future__ import annotations

import math
from functools import reduce

from src.tiletrace.core.matrix import Matrix4
from src.tiletrace.core.vector import Tuple4


def translation(x: float, y: float, z: float) -> Matrix4:
    """Translation by (x, y, z). Vectors (w = 0) are unaffected."""
    return Matrix4.from_rows(
        (1.0, 0.0, 0.0, x),
        (0.0, 1.0, 0.0, y),
        (0.0, 0.0, 1.0, z),
        (0.0, 0.0, 0.0, 1.0),
    )


def scaling(x: float, y: float, z: float) -> Matrix4:
    """Axis-aligned scaling. A zero factor yields a singular matrix."""
    return Matrix4.from_rows(
        (x, 0.0, 0.0, 0.0),
        (0.0, y, 0.0, 0.0),
        (0.0, 0.0, z, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def rotation_x(radians: float) -> Matrix4:
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix4.from_rows(
        (1.0, 0.0, 0.0, 0.0),
        (0.0, c, -s, 0.0),
        (0.0, s, c, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def rotation_y(radians: float) -> Matrix4:
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix4.from_rows(
        (c, 0.0, s, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (-s, 0.0, c, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def rotation_z(radians: float) -> Matrix4:
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix4.from_rows(
        (c, -s, 0.0, 0.0),
        (s, c, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def shearing(
    xy: float = 0.0,
    xz: float = 0.0,
    yx: float = 0.0,
    yz: float = 0.0,
    zx: float = 0.0,
    zy: float = 0.0,
) -> Matrix4:
    """Shear transform; ``xy`` moves x in proportion to y, and so on."""
    return Matrix4.from_rows(
        (1.0, xy, xz, 0.0),
        (yx, 1.0, yz, 0.0),
        (zx, zy, 1.0, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def chain(*transforms: Matrix4) -> Matrix4:
    """Compose transforms given in application order.

    Args:
        *transforms: Transforms in the order they should be applied.

    Returns:
        ``transforms[-1] * ... * transforms[0]``, or identity for no arguments.
    """
    return reduce(lambda acc, t: t * acc, transforms, Matrix4.identity())


def view_transform(from_point: Tuple4, to_point: Tuple4, up: Tuple4) -> Matrix4:
    """Build the camera transform that orients the world relative to an eye.

    The returned matrix maps world space into camera space for an eye at
    ``from_point`` looking at ``to_point``. The camera applies its inverse to
    turn view-plane points back into world space.

    Args:
        from_point: Eye position (point).
        to_point: Point being looked at.
        up: Approximate up vector; need not be normalized or orthogonal.

    Returns:
        The orientation matrix multiplied by the eye translation.

    Raises:
        NotAVectorError: If ``up`` is not a vector.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix4.from_rows(
        (left.x, left.y, left.z, 0.0),
        (true_up.x, true_up.y, true_up.z, 0.0),
        (-forward.x, -forward.y, -forward.z, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )
    return orientation * translation(-from_point.x, -from_point.y, -from_point.z)
