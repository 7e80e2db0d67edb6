"""Describe the memory layout of a 2-D array in LAPACK terms."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

from .error import InvalidStrideError, MemoryNotContiguousError, NotSquareError


class LayoutOrder(enum.Enum):
    """Row-major (C) or column-major (Fortran) storage."""

    C = "C"
    F = "F"


@dataclass(frozen=True)
class MatrixLayout:
    """Storage order plus the leading dimension.

    For C order ``n`` is the number of rows and ``lda`` the number of columns;
    for F order ``n`` is the number of columns and ``lda`` the number of rows.
    """

    order: LayoutOrder
    n: int
    lda: int

    def size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the described matrix."""
        if self.order is LayoutOrder.C:
            return self.n, self.lda
        return self.lda, self.n


def _as_matrix(a) -> np.ndarray:
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D array, got {arr.ndim} dimensions")
    return arr


def layout(a) -> MatrixLayout:
    """Return the layout of ``a`` or raise if its strides are unsupported."""
    arr = _as_matrix(a)
    rows, cols = arr.shape
    s0, s1 = (s // arr.itemsize for s in arr.strides)
    if rows == s1:
        return MatrixLayout(LayoutOrder.F, cols, rows)
    if cols == s0:
        return MatrixLayout(LayoutOrder.C, rows, cols)
    raise InvalidStrideError(s0, s1)


def square_layout(a) -> MatrixLayout:
    """Return the layout of ``a``, requiring it to be square."""
    lay = layout(a)
    rows, cols = lay.size()
    if rows != cols:
        raise NotSquareError(rows, cols)
    return lay


def ensure_square(a) -> None:
    """Raise ``NotSquareError`` unless ``a`` is square; layout is not checked."""
    rows, cols = _as_matrix(a).shape
    if rows != cols:
        raise NotSquareError(rows, cols)


def as_allocated(a) -> np.ndarray:
    """Return a flat view of ``a`` in memory order."""
    arr = np.asarray(a)
    if arr.flags.c_contiguous:
        return arr.reshape(-1)
    if arr.flags.f_contiguous:
        return arr.ravel(order="F")
    raise MemoryNotContiguousError()