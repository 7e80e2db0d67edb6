"""Exception hierarchy for linear-algebra failures."""

from __future__ import annotations


class LinalgError(Exception):
    """Base class of every error raised by this package."""


class NotSquareError(LinalgError):
    """The matrix is not square."""

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        super().__init__(f"Not square: rows({rows}) != cols({cols})")


class InvalidStrideError(LinalgError):
    """The strides of the array cannot be expressed as a LAPACK layout."""

    def __init__(self, s0: int, s1: int) -> None:
        self.s0 = s0
        self.s1 = s1
        super().__init__(f"invalid stride: s0={s0}, s1={s1}")


class MemoryNotContiguousError(LinalgError):
    """The array memory is not one contiguous block."""

    def __init__(self) -> None:
        super().__init__("Memory is not contiguous")


class NotStandardShapeError(LinalgError):
    """An object cannot be built from a matrix of the given shape."""

    def __init__(self, obj: str, rows: int, cols: int) -> None:
        self.obj = obj
        self.rows = rows
        self.cols = cols
        super().__init__(f"{obj} cannot be made from a ({rows}, {cols}) matrix")


class IncompatibleShapeError(LinalgError):
    """Array shapes do not fit together for the requested operation."""

    def __init__(self, message: str = "incompatible shapes") -> None:
        super().__init__(message)


class LapackError(LinalgError):
    """A LAPACK-style computation reported failure."""

    def __init__(self, return_code: int, message: str | None = None) -> None:
        self.return_code = return_code
        super().__init__(
            message
            if message is not None
            else f"LAPACK computation failed with return code {return_code}"
        )