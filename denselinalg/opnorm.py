"""Operator norms of dense and tridiagonal matrices."""

from __future__ import annotations

import enum

import numpy as np

from .error import IncompatibleShapeError
from .layout import as_allocated, layout


class NormType(enum.Enum):
    """Which operator norm to compute."""

    One = "O"
    Infinity = "I"
    Frobenius = "F"


def _norm_of(arr: np.ndarray, norm_type: NormType) -> float:
    mags = np.abs(arr)
    if norm_type is NormType.One:
        return float(mags.sum(axis=0).max(initial=0.0))
    if norm_type is NormType.Infinity:
        return float(mags.sum(axis=1).max(initial=0.0))
    return float(np.sqrt(np.sum(mags**2)))


def opnorm(a, norm_type) -> float:
    """Operator norm of a matrix stored in C or Fortran order."""
    arr = np.asarray(a)
    layout(arr)
    as_allocated(arr)
    return _norm_of(arr, NormType(norm_type))


def opnorm_one(a) -> float:
    """Maximum absolute column sum."""
    return opnorm(a, NormType.One)


def opnorm_inf(a) -> float:
    """Maximum absolute row sum."""
    return opnorm(a, NormType.Infinity)


def opnorm_fro(a) -> float:
    """Square root of the sum of squared magnitudes."""
    return opnorm(a, NormType.Frobenius)


def opnorm_tridiagonal(dl, d, du, norm_type) -> float:
    """Operator norm of the tridiagonal matrix with sub-, main and super-diagonals."""
    lower = np.asarray(dl)
    diag = np.asarray(d)
    upper = np.asarray(du)
    expected = max(diag.shape[0] - 1, 0)
    if lower.shape != (expected,) or upper.shape != (expected,) or diag.ndim != 1:
        raise IncompatibleShapeError(
            "sub- and super-diagonal must be one shorter than the diagonal"
        )
    norm_type = NormType(norm_type)
    dtype = np.result_type(lower.dtype, diag.dtype, upper.dtype)
    zero = np.zeros(1 if diag.shape[0] else 0, dtype=dtype)
    if norm_type is NormType.One:
        # Columns aligned: row 0 holds du, row 1 d, row 2 dl.
        arr = np.stack(
            [np.concatenate([zero, upper]), diag, np.concatenate([lower, zero])]
        )
    elif norm_type is NormType.Infinity:
        # Rows aligned: column 0 holds dl, column 1 d, column 2 du.
        arr = np.stack(
            [np.concatenate([zero, lower]), diag, np.concatenate([upper, zero])],
            axis=1,
        )
    else:
        arr = np.concatenate([lower, diag, upper])[np.newaxis, :]
    return _norm_of(arr, norm_type)