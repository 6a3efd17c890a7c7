"""Homogeneous tuples for points and vectors.

This module provides the immutable 2, 3 and 4 component tuples used by the
matrix kernel and by every geometric operation in the tracer. A Tuple4 with
``w == 1.0`` is a point, with ``w == 0.0`` a vector, so points and vectors
share one affine-transform pipeline (translation moves points but leaves
vectors untouched).

Every operator returns a new instance; tuples are never mutated.

Example:
    >>> from src.tiletrace.core.vector import Tuple4
    >>> p = Tuple4.point(1.0, 2.0, 3.0)
    >>> v = Tuple4.vector(0.0, 0.0, 1.0)
    >>> p + v * 2.0
    Tuple4(x=1.0, y=2.0, z=5.0, w=1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, fields
from typing import TypeVar

from src.tiletrace.core.errors import NotAVectorError

# Absolute tolerance used for approximate comparisons of floats
EPSILON = 1e-4

_T = TypeVar("_T", bound="_TupleOps")


class _TupleOps:
    """Component-wise arithmetic shared by all tuple widths."""

    __slots__ = ()

    def __iter__(self) -> Iterator[float]:
        return iter(tuple(getattr(self, f.name) for f in fields(self)))  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(fields(self))  # type: ignore[arg-type]

    def __getitem__(self, index: int) -> float:
        return tuple(self)[index]

    def __add__(self: _T, other: object) -> _T:
        if not isinstance(other, type(self)):
            return NotImplemented
        return type(self)(*(a + b for a, b in zip(self, other)))

    def __sub__(self: _T, other: object) -> _T:
        if not isinstance(other, type(self)):
            return NotImplemented
        return type(self)(*(a - b for a, b in zip(self, other)))

    def __neg__(self: _T) -> _T:
        return type(self)(*(-a for a in self))

    def __mul__(self: _T, scalar: object) -> _T:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return type(self)(*(a * scalar for a in self))

    def __rmul__(self: _T, scalar: object) -> _T:
        return self.__mul__(scalar)

    def __truediv__(self: _T, scalar: object) -> _T:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return type(self)(*(a / scalar for a in self))

    def dot(self: _T, other: _T) -> float:
        """Compute the dot product with another tuple of the same width."""
        return sum(a * b for a, b in zip(self, other))

    def length_squared(self) -> float:
        """Compute the squared length, avoiding the square root."""
        return self.dot(self)

    def length(self) -> float:
        """Compute the Euclidean length over all components."""
        return math.sqrt(self.length_squared())

    def normalize(self: _T) -> _T:
        """Return this tuple scaled by ``1 / length``.

        The caller must guarantee a non-zero length; normalizing a zero
        tuple raises ZeroDivisionError.
        """
        return self / self.length()


@dataclass(frozen=True, slots=True)
class Tuple2(_TupleOps):
    """A 2-component tuple, the column type of Matrix2."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Tuple3(_TupleOps):
    """A 3-component tuple, the column type of Matrix3."""

    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class Tuple4(_TupleOps):
    """A homogeneous 4-component tuple.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
        w: Homogeneous component; 1.0 for points, 0.0 for vectors.
    """

    x: float
    y: float
    z: float
    w: float

    @classmethod
    def point(cls, x: float, y: float, z: float) -> Tuple4:
        """Create a point (w = 1.0)."""
        return cls(x, y, z, 1.0)

    @classmethod
    def vector(cls, x: float, y: float, z: float) -> Tuple4:
        """Create a vector (w = 0.0)."""
        return cls(x, y, z, 0.0)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z, self.w))

    def is_point(self) -> bool:
        return self.w == 1.0

    def is_vector(self) -> bool:
        return self.w == 0.0

    def with_w(self, w: float) -> Tuple4:
        """Return a copy of this tuple with the homogeneous component replaced."""
        return Tuple4(self.x, self.y, self.z, w)

    def dot(self, other: Tuple4) -> float:  # type: ignore[override]
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Tuple4) -> Tuple4:
        """Compute the cross product of two vectors.

        Args:
            other: The right-hand operand.

        Returns:
            The vector ``self x other``.

        Raises:
            NotAVectorError: If either operand is not a vector (w != 0).
        """
        if not (self.is_vector() and other.is_vector()):
            raise NotAVectorError(f"Cross product is only defined for vectors: {self}, {other}")
        return Tuple4.vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Tuple4) -> Tuple4:
        """Reflect this (incident) vector about a normal.

        Args:
            normal: The surface normal (should be normalized).

        Returns:
            The reflected vector ``self - normal * 2 * dot(self, normal)``.
        """
        return self - normal * (2.0 * self.dot(normal))


def approx_equal(a: _TupleOps, b: _TupleOps, epsilon: float = EPSILON) -> bool:
    """Compare two tuples component-wise within an absolute tolerance."""
    if type(a) is not type(b):
        return False
    return all(abs(x - y) < epsilon for x, y in zip(a, b))
