"""QR decomposition."""

from __future__ import annotations

import enum

import numpy as np

from .layout import ensure_square


class UPLO(enum.Enum):
    """Which triangle of a matrix is referenced."""

    Upper = "U"
    Lower = "L"


def _as_matrix(a) -> np.ndarray:
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D array, got {arr.ndim} dimensions")
    return arr


def qr(a) -> tuple[np.ndarray, np.ndarray]:
    """Reduced QR: ``q`` is n x k, ``r`` is k x m upper triangular, k = min(n, m)."""
    q, r = np.linalg.qr(_as_matrix(a), mode="reduced")
    return q, np.triu(r)


def qr_square(a) -> tuple[np.ndarray, np.ndarray]:
    """QR decomposition of a square matrix."""
    arr = _as_matrix(a)
    ensure_square(arr)
    return qr(arr)