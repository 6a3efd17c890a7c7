"""Square matrices for affine transforms.

This module provides 2x2, 3x3 and 4x4 matrices stored as column tuples of
the matching width (Tuple2, Tuple3, Tuple4). Matrix4 is the transform type
used throughout the tracer; the reduced forms exist for determinant and
inverse computation by cofactor expansion:

    Matrix4 --submatrix--> Matrix3 --submatrix--> Matrix2 (ad - bc)

Matrices are immutable. Multiplication is associative but not commutative;
``identity()`` is the multiplicative identity and ``inverse()`` is defined
iff the determinant is non-zero.

Example:
    >>> from src.tiletrace.core.matrix import Matrix4
    >>> m = Matrix4.from_rows(
    ...     (1.0, 0.0, 0.0, 5.0),
    ...     (0.0, 1.0, 0.0, 0.0),
    ...     (0.0, 0.0, 1.0, 0.0),
    ...     (0.0, 0.0, 0.0, 1.0),
    ... )
    >>> m.inverse() * m == Matrix4.identity()
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import ClassVar, TypeVar

from src.tiletrace.core.errors import SingularMatrixError, SubmatrixIndexError
from src.tiletrace.core.vector import EPSILON, Tuple2, Tuple3, Tuple4

_M = TypeVar("_M", bound="_SquareMatrix")


class _SquareMatrix:
    """Column-major square matrix of fixed size.

    Subclasses set ``size`` and ``column_type``. Columns are stored as a
    tuple of ``column_type`` instances; rows are derived once at
    construction for multiplication.
    """

    __slots__ = ("_columns", "_rows")

    size: ClassVar[int]
    column_type: ClassVar[type]

    def __init__(self, *columns: Iterable[float]) -> None:
        if len(columns) != self.size:
            raise ValueError(
                f"{type(self).__name__} requires {self.size} columns, got {len(columns)}"
            )
        cols = []
        for column in columns:
            values = tuple(float(v) for v in column)
            if len(values) != self.size:
                raise ValueError(
                    f"{type(self).__name__} columns must have {self.size} components"
                )
            cols.append(self.column_type(*values))
        self._columns: tuple = tuple(cols)
        self._rows: tuple[tuple[float, ...], ...] = tuple(
            tuple(col[r] for col in self._columns) for r in range(self.size)
        )

    @classmethod
    def from_rows(cls: type[_M], *rows: Sequence[float]) -> _M:
        """Build a matrix from row sequences (the way matrices are written on paper)."""
        if len(rows) != cls.size:
            raise ValueError(f"{cls.__name__} requires {cls.size} rows, got {len(rows)}")
        return cls(*zip(*rows))

    @classmethod
    def identity(cls: type[_M]) -> _M:
        """Create the identity matrix."""
        return cls(
            *(tuple(1.0 if r == c else 0.0 for r in range(cls.size)) for c in range(cls.size))
        )

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def columns(self) -> tuple:
        return self._columns

    def column(self, index: int):
        return self._columns[index]

    def row(self, index: int):
        return self.column_type(*self._rows[index])

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, column = key
        return self._rows[row][column]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._columns == other._columns

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._columns))

    def __repr__(self) -> str:
        rows = ", ".join(str(r) for r in self._rows)
        return f"{type(self).__name__}.from_rows({rows})"

    def approx_equal(self, other: _SquareMatrix, epsilon: float = EPSILON) -> bool:
        """Compare two matrices element-wise within an absolute tolerance."""
        if type(self) is not type(other):
            return False
        return all(
            abs(a - b) < epsilon
            for row_a, row_b in zip(self._rows, other._rows)
            for a, b in zip(row_a, row_b)
        )

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __mul__(self, other: object):
        if isinstance(other, _SquareMatrix):
            if type(other) is not type(self):
                return NotImplemented
            return type(self)(
                *(
                    tuple(sum(a * b for a, b in zip(row, col)) for row in self._rows)
                    for col in other._columns
                )
            )
        if isinstance(other, self.column_type):
            return self.column_type(*(sum(a * b for a, b in zip(row, other)) for row in self._rows))
        if isinstance(other, (int, float)):
            return type(self)(*(tuple(v * other for v in col) for col in self._columns))
        return NotImplemented

    def __rmul__(self, other: object):
        if isinstance(other, (int, float)):
            return self.__mul__(other)
        return NotImplemented

    def transpose(self: _M) -> _M:
        """Return a new matrix with rows and columns swapped."""
        return type(self)(*self._rows)


class Matrix2(_SquareMatrix):
    """A 2x2 matrix, the base case of cofactor expansion."""

    __slots__ = ()

    size = 2
    column_type = Tuple2

    def determinant(self) -> float:
        return self[0, 0] * self[1, 1] - self[0, 1] * self[1, 0]


class _ReducibleMatrix(_SquareMatrix):
    """Matrix whose determinant is expanded through submatrices.

    Subclasses set ``submatrix_type`` to the next smaller matrix class.
    """

    __slots__ = ()

    submatrix_type: ClassVar[type[_SquareMatrix]]

    def submatrix(self, row: int, column: int):
        """Remove one row and one column.

        Args:
            row: Index of the row to remove.
            column: Index of the column to remove.

        Returns:
            The matrix of the next smaller size.

        Raises:
            SubmatrixIndexError: If row or column is outside ``[0, size)``.
        """
        if not (0 <= row < self.size and 0 <= column < self.size):
            raise SubmatrixIndexError(row, column, self.size)
        return self.submatrix_type(
            *(
                tuple(v for r, v in enumerate(col) if r != row)
                for c, col in enumerate(self._columns)
                if c != column
            )
        )

    def minor(self, row: int, column: int) -> float:
        """Determinant of the submatrix at (row, column)."""
        return self.submatrix(row, column).determinant()

    def cofactor(self, row: int, column: int) -> float:
        """Signed minor: ``(-1)^(row + column) * minor(row, column)``."""
        minor = self.minor(row, column)
        return -minor if (row + column) % 2 else minor

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first column."""
        return sum(self[r, 0] * self.cofactor(r, 0) for r in range(self.size))

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def _compute_inverse(self):
        determinant = self.determinant()
        if determinant == 0.0:
            raise SingularMatrixError(f"{self!r} has no inverse (determinant is 0)")
        # Column k of the inverse holds the cofactors of row k (transposed cofactor matrix)
        return type(self)(
            *(
                tuple(self.cofactor(k, i) / determinant for i in range(self.size))
                for k in range(self.size)
            )
        )

    def inverse(self):
        """Compute the inverse as the adjugate scaled by ``1 / determinant``.

        Raises:
            SingularMatrixError: If the determinant is zero.
        """
        return self._compute_inverse()


class Matrix3(_ReducibleMatrix):
    """A 3x3 matrix, reduced to Matrix2 by submatrix extraction."""

    __slots__ = ()

    size = 3
    column_type = Tuple3
    submatrix_type = Matrix2


class Matrix4(_ReducibleMatrix):
    """A 4x4 affine transform matrix.

    The inverse is memoised per instance. Matrices are immutable, so the
    cached value never goes stale; concurrent first calls from several
    worker threads may each compute it, and all of them store an equal
    result.
    """

    __slots__ = ("_inverse",)

    size = 4
    column_type = Tuple4
    submatrix_type = Matrix3

    def __init__(self, *columns: Iterable[float]) -> None:
        super().__init__(*columns)
        self._inverse: Matrix4 | SingularMatrixError | None = None

    def inverse(self) -> Matrix4:
        """Compute (or return the cached) inverse of this transform.

        Raises:
            SingularMatrixError: If the determinant is zero.
        """
        cached = self._inverse
        if cached is None:
            try:
                cached = self._compute_inverse()
            except SingularMatrixError as exc:
                cached = exc
            self._inverse = cached
        if isinstance(cached, SingularMatrixError):
            raise SingularMatrixError(*cached.args)
        return cached

    def normal_matrix(self) -> Matrix4:
        """Inverse-transpose, the transform that maps object normals to world space.

        Raises:
            SingularMatrixError: If this transform is not invertible.
        """
        return self.inverse().transpose()
