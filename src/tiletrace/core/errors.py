"""Exception types raised by the tiletrace core.

All errors are local and recoverable. The intersector absorbs
SingularMatrixError for individual objects; the remaining kinds are
surfaced to the caller of the algebra or rendering API.
"""


class TiletraceError(Exception):
    """Base class for all tiletrace errors."""


class SingularMatrixError(TiletraceError, ArithmeticError):
    """Raised when inverting a matrix whose determinant is zero."""


class SubmatrixIndexError(TiletraceError, IndexError):
    """Raised when a submatrix is requested with an out-of-range row or column."""

    def __init__(self, row: int, column: int, size: int) -> None:
        super().__init__(
            f"Submatrix index ({row}, {column}) out of range for {size}x{size} matrix"
        )
        self.row = row
        self.column = column
        self.size = size

    def __reduce__(self):
        return (type(self), (self.row, self.column, self.size))


class NotAVectorError(TiletraceError, ValueError):
    """Raised when a vector-only operation (cross product) receives a point."""


class RenderCancelled(TiletraceError):
    """Raised by the tile renderer when a render was cancelled cooperatively.

    Attributes:
        completed: Number of tiles that finished before cancellation.
        total: Total number of tiles in the render.
    """

    def __init__(self, completed: int, total: int) -> None:
        super().__init__(f"Render cancelled after {completed}/{total} tiles")
        self.completed = completed
        self.total = total

    def __reduce__(self):
        return (type(self), (self.completed, self.total))
