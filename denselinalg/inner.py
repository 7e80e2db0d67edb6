"""Inner product that conjugates its left argument."""

from __future__ import annotations

import numpy as np


def inner(a, b):
    """Return ``sum(conj(a) * b)`` for two vectors of equal length."""
    x = np.asarray(a)
    y = np.asarray(b)
    if x.ndim != 1 or y.ndim != 1:
        raise ValueError("inner product needs two 1-D arrays")
    if x.shape[0] != y.shape[0]:
        raise ValueError(f"length mismatch: {x.shape[0]} != {y.shape[0]}")
    return np.vdot(x, y)