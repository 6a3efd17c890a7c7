"""Unit tests for homogeneous tuples.

Tests cover:
- Point/vector construction and the w component
- Component-wise arithmetic and scalar operations
- Length, normalization, dot and cross products
- Reflection about a normal
- Immutability and approximate comparison
"""

import dataclasses
import math

import pytest


class TestTupleConstruction:
    """Tests for point and vector constructors."""

    def test_point_has_w_one(self):
        """Test that a point is a tuple with w = 1."""
        from src.tiletrace.core.vector import Tuple4

        p = Tuple4.point(4.3, -4.2, 3.1)
        assert p == Tuple4(4.3, -4.2, 3.1, 1.0)
        assert p.is_point()
        assert not p.is_vector()

    def test_vector_has_w_zero(self):
        """Test that a vector is a tuple with w = 0."""
        from src.tiletrace.core.vector import Tuple4

        v = Tuple4.vector(4.3, -4.2, 3.1)
        assert v == Tuple4(4.3, -4.2, 3.1, 0.0)
        assert v.is_vector()
        assert not v.is_point()

    def test_with_w_replaces_homogeneous_component(self):
        """Test that with_w returns a copy with a new w."""
        from src.tiletrace.core.vector import Tuple4

        p = Tuple4.point(1.0, 2.0, 3.0)
        v = p.with_w(0.0)
        assert v == Tuple4.vector(1.0, 2.0, 3.0)
        assert p.w == 1.0

    def test_sequence_protocol(self):
        """Test iteration, length and indexing over components."""
        from src.tiletrace.core.vector import Tuple2, Tuple3, Tuple4

        assert list(Tuple4(1.0, 2.0, 3.0, 4.0)) == [1.0, 2.0, 3.0, 4.0]
        assert len(Tuple3(1.0, 2.0, 3.0)) == 3
        assert Tuple2(5.0, 6.0)[1] == 6.0

    def test_tuples_are_immutable(self):
        """Test that tuple fields cannot be assigned."""
        from src.tiletrace.core.vector import Tuple4

        p = Tuple4.point(1.0, 2.0, 3.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 5.0  # type: ignore[misc]


class TestTupleArithmetic:
    """Tests for component-wise arithmetic."""

    def test_point_plus_vector_is_point(self):
        """Test adding a vector to a point."""
        from src.tiletrace.core.vector import Tuple4

        result = Tuple4(3.0, -2.0, 5.0, 1.0) + Tuple4(-2.0, 3.0, 1.0, 0.0)
        assert result == Tuple4(1.0, 1.0, 6.0, 1.0)
        assert result.is_point()

    def test_point_minus_point_is_vector(self):
        """Test that subtracting two points gives the vector between them."""
        from src.tiletrace.core.vector import Tuple4

        result = Tuple4.point(3.0, 2.0, 1.0) - Tuple4.point(5.0, 6.0, 7.0)
        assert result == Tuple4.vector(-2.0, -4.0, -6.0)

    def test_point_minus_vector_is_point(self):
        """Test subtracting a vector from a point."""
        from src.tiletrace.core.vector import Tuple4

        result = Tuple4.point(3.0, 2.0, 1.0) - Tuple4.vector(5.0, 6.0, 7.0)
        assert result == Tuple4.point(-2.0, -4.0, -6.0)

    def test_negation(self):
        """Test negating every component."""
        from src.tiletrace.core.vector import Tuple4

        assert -Tuple4(1.0, -2.0, 3.0, -4.0) == Tuple4(-1.0, 2.0, -3.0, 4.0)

    def test_scalar_multiplication_and_division(self):
        """Test scaling by a scalar from either side, and division."""
        from src.tiletrace.core.vector import Tuple4

        a = Tuple4(1.0, -2.0, 3.0, -4.0)
        assert a * 3.5 == Tuple4(3.5, -7.0, 10.5, -14.0)
        assert 0.5 * a == Tuple4(0.5, -1.0, 1.5, -2.0)
        assert a / 2.0 == Tuple4(0.5, -1.0, 1.5, -2.0)

    def test_mixed_widths_are_rejected(self):
        """Test that tuples of different widths cannot be added."""
        from src.tiletrace.core.vector import Tuple3, Tuple4

        with pytest.raises(TypeError):
            Tuple4(1.0, 2.0, 3.0, 0.0) + Tuple3(1.0, 2.0, 3.0)  # type: ignore[operator]

    def test_smaller_tuples_support_arithmetic(self):
        """Test that Tuple2 and Tuple3 share the arithmetic."""
        from src.tiletrace.core.vector import Tuple2, Tuple3

        assert Tuple2(1.0, 2.0) + Tuple2(3.0, 4.0) == Tuple2(4.0, 6.0)
        assert Tuple3(1.0, 2.0, 3.0) * 2.0 == Tuple3(2.0, 4.0, 6.0)
        assert Tuple3(1.0, 2.0, 3.0).dot(Tuple3(2.0, 3.0, 4.0)) == 20.0


class TestTupleGeometry:
    """Tests for length, normalization, dot and cross products."""

    def test_length_of_unit_vectors(self):
        """Test the length of the axis unit vectors."""
        from src.tiletrace.core.vector import Tuple4

        assert Tuple4.vector(1.0, 0.0, 0.0).length() == 1.0
        assert Tuple4.vector(0.0, 0.0, 1.0).length() == 1.0

    def test_length_of_general_vectors(self):
        """Test the length of vectors with several components."""
        from src.tiletrace.core.vector import Tuple4

        assert abs(Tuple4.vector(1.0, 2.0, 3.0).length() - math.sqrt(14.0)) < 1e-12
        assert abs(Tuple4.vector(-1.0, -2.0, -3.0).length() - math.sqrt(14.0)) < 1e-12
        assert Tuple4.vector(1.0, 2.0, 3.0).length_squared() == 14.0

    def test_normalize(self):
        """Test that normalization gives a unit vector in the same direction."""
        from src.tiletrace.core.vector import Tuple4, approx_equal

        assert Tuple4.vector(4.0, 0.0, 0.0).normalize() == Tuple4.vector(1.0, 0.0, 0.0)

        v = Tuple4.vector(1.0, 2.0, 3.0)
        n = v.normalize()
        assert approx_equal(n, Tuple4.vector(0.26726, 0.53452, 0.80178))
        assert abs(n.length() - 1.0) < 1e-12

    def test_normalize_returns_new_tuple(self):
        """Test that normalize leaves the original untouched."""
        from src.tiletrace.core.vector import Tuple4

        v = Tuple4.vector(4.0, 0.0, 0.0)
        v.normalize()
        assert v == Tuple4.vector(4.0, 0.0, 0.0)

    def test_dot_product(self):
        """Test the dot product of two vectors."""
        from src.tiletrace.core.vector import Tuple4

        assert Tuple4.vector(1.0, 2.0, 3.0).dot(Tuple4.vector(2.0, 3.0, 4.0)) == 20.0

    def test_cross_product(self):
        """Test that the cross product is anti-commutative."""
        from src.tiletrace.core.vector import Tuple4

        a = Tuple4.vector(1.0, 2.0, 3.0)
        b = Tuple4.vector(2.0, 3.0, 4.0)
        assert a.cross(b) == Tuple4.vector(-1.0, 2.0, -1.0)
        assert b.cross(a) == Tuple4.vector(1.0, -2.0, 1.0)

    def test_cross_product_rejects_points(self):
        """Test that crossing a point raises NotAVectorError."""
        from src.tiletrace.core.errors import NotAVectorError
        from src.tiletrace.core.vector import Tuple4

        with pytest.raises(NotAVectorError):
            Tuple4.point(1.0, 2.0, 3.0).cross(Tuple4.vector(2.0, 3.0, 4.0))
        with pytest.raises(ValueError, match="only defined for vectors"):
            Tuple4.vector(1.0, 2.0, 3.0).cross(Tuple4.point(2.0, 3.0, 4.0))

    def test_reflect_at_45_degrees(self):
        """Test reflecting a vector approaching at 45 degrees."""
        from src.tiletrace.core.vector import Tuple4

        v = Tuple4.vector(1.0, -1.0, 0.0)
        n = Tuple4.vector(0.0, 1.0, 0.0)
        assert v.reflect(n) == Tuple4.vector(1.0, 1.0, 0.0)

    def test_reflect_off_slanted_surface(self):
        """Test reflecting a vector off a slanted surface."""
        from src.tiletrace.core.vector import Tuple4, approx_equal

        v = Tuple4.vector(0.0, -1.0, 0.0)
        half = math.sqrt(2.0) / 2.0
        n = Tuple4.vector(half, half, 0.0)
        assert approx_equal(v.reflect(n), Tuple4.vector(1.0, 0.0, 0.0))


class TestApproxEqual:
    """Tests for tolerance-based comparison."""

    def test_within_epsilon(self):
        """Test that differences below EPSILON compare equal."""
        from src.tiletrace.core.vector import EPSILON, Tuple4, approx_equal

        a = Tuple4.point(1.0, 2.0, 3.0)
        b = Tuple4.point(1.0 + EPSILON / 2.0, 2.0, 3.0)
        assert approx_equal(a, b)

    def test_outside_epsilon(self):
        """Test that larger differences compare unequal."""
        from src.tiletrace.core.vector import Tuple4, approx_equal

        assert not approx_equal(Tuple4.point(1.0, 2.0, 3.0), Tuple4.point(1.001, 2.0, 3.0))

    def test_different_widths_are_unequal(self):
        """Test that tuples of different widths never compare equal."""
        from src.tiletrace.core.vector import Tuple3, Tuple4, approx_equal

        assert not approx_equal(Tuple3(1.0, 2.0, 3.0), Tuple4(1.0, 2.0, 3.0, 0.0))
