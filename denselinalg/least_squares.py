"""Least-squares solutions of ``A x = b`` via the divide-and-conquer SVD."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import scipy.linalg

from .error import IncompatibleShapeError, LapackError


@dataclass
class LeastSquaresResult:
    """Outcome of a least-squares solve.

    ``solution`` has one dimension when the right-hand side is a vector and two
    when it is a matrix. ``residual_sum_of_squares`` is only set when the
    system is not underdetermined and ``A`` has full column rank: a float for
    a vector right-hand side, one value per column for a matrix one.
    """

    singular_values: np.ndarray
    solution: np.ndarray
    rank: int
    residual_sum_of_squares: float | np.ndarray | None


def _prepare(a, rhs) -> tuple[np.ndarray, np.ndarray]:
    arr = np.asarray(a)
    b = np.asarray(rhs)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D matrix, got {arr.ndim} dimensions")
    if b.ndim not in (1, 2):
        raise ValueError(
            f"right-hand side must be 1-D or 2-D, got {b.ndim} dimensions"
        )
    if arr.shape[0] != b.shape[0]:
        raise IncompatibleShapeError(
            f"matrix has {arr.shape[0]} rows but right-hand side has {b.shape[0]}"
        )
    dtype = np.result_type(arr.dtype, b.dtype)
    if not np.issubdtype(dtype, np.inexact):
        dtype = np.dtype(np.float64)
    return arr.astype(dtype, copy=False), b.astype(dtype, copy=False)


def _residual(arr: np.ndarray, b: np.ndarray, x: np.ndarray, rank: int):
    m, n = arr.shape
    if m < n or rank != n:
        return None
    diff = b - arr @ x
    sums = np.sum(np.abs(diff) ** 2, axis=0)
    if b.ndim == 1:
        return float(sums)
    return np.asarray(sums)


def _solve(arr: np.ndarray, b: np.ndarray) -> LeastSquaresResult:
    try:
        x, _, rank, sv = scipy.linalg.lstsq(arr, b, lapack_driver="gelsd")
    except np.linalg.LinAlgError as exc:
        raise LapackError(1, str(exc)) from exc
    x = np.asarray(x, dtype=b.dtype)
    rank = int(rank)
    return LeastSquaresResult(
        singular_values=np.asarray(sv),
        solution=x,
        rank=rank,
        residual_sum_of_squares=_residual(arr, b, x, rank),
    )


def least_squares(a, rhs) -> LeastSquaresResult:
    """Minimise ``|rhs - a x|`` in the 2-norm; ``a`` and ``rhs`` are unchanged."""
    arr, b = _prepare(a, rhs)
    return _solve(arr, b)


def least_squares_in_place(a, rhs) -> LeastSquaresResult:
    """Like ``least_squares`` but also writes the solution into ``rhs``.

    When ``a`` has no more columns than rows, the leading rows of ``rhs``
    are overwritten with the solution. An underdetermined system needs more
    rows than ``rhs`` has, so ``rhs`` is then left as it is.
    """
    if not isinstance(rhs, np.ndarray):
        raise TypeError("rhs must be a numpy array to be overwritten")
    arr, b = _prepare(a, rhs)
    b = b.copy()
    result = _solve(arr, b)
    n = arr.shape[1]
    if n <= arr.shape[0]:
        if not np.can_cast(result.solution.dtype, rhs.dtype, casting="same_kind"):
            raise TypeError(
                f"cannot store a {result.solution.dtype} solution in a "
                f"{rhs.dtype} right-hand side"
            )
        rhs[:n] = result.solution
    return result