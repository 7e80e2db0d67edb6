"""Vector-space norms of arrays (not operator norms)."""

from __future__ import annotations

import enum

import numpy as np


class NormalizeAxis(enum.IntEnum):
    """Which vectors of a matrix ``normalize`` scales."""

    Row = 0
    Column = 1


def norm_l1(a) -> float:
    """Sum of absolute values of all elements."""
    return float(np.sum(np.abs(np.asarray(a))))


def norm_l2(a) -> float:
    """Square root of the sum of squared magnitudes of all elements."""
    arr = np.asarray(a)
    return float(np.sqrt(np.sum(np.abs(arr) ** 2)))


def norm(a) -> float:
    """The L2 norm."""
    return norm_l2(a)


def norm_max(a) -> float:
    """Largest absolute value; zero for an empty array."""
    arr = np.abs(np.asarray(a))
    return float(max(arr.max(initial=0.0), 0.0))


def normalize(m, axis) -> tuple[np.ndarray, list[float]]:
    """Scale every row or column of ``m`` to unit L2 norm.

    Returns the scaled matrix and the norms that were divided out.
    """
    axis = NormalizeAxis(axis)
    arr = np.asarray(m)
    result = np.array(arr, dtype=np.result_type(arr.dtype, np.float64))
    vectors = result if axis is NormalizeAxis.Row else result.T
    norms = []
    with np.errstate(divide="ignore", invalid="ignore"):
        for vec in vectors:
            n = norm_l2(vec)
            norms.append(n)
            vec /= n
    return result, norms