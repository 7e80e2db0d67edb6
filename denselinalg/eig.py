"""Eigenvalue decomposition of general (non-symmetric) square matrices."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np
import scipy.linalg

from .error import IncompatibleShapeError, LapackError
from .layout import ensure_square


@contextmanager
def _lapack_errors() -> Iterator[None]:
    try:
        yield
    except np.linalg.LinAlgError as exc:
        raise LapackError(1, str(exc)) from exc


def _square_matrix(a) -> np.ndarray:
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D array, got {arr.ndim} dimensions")
    if not np.issubdtype(arr.dtype, np.inexact):
        arr = arr.astype(np.float64)
    ensure_square(arr)
    return arr


def _complex_dtype(dtype) -> np.dtype:
    return np.result_type(dtype, np.complex64)


def eig(a) -> tuple[np.ndarray, np.ndarray]:
    """Eigenvalues and right eigenvectors (as columns) of a square matrix.

    Both results are complex, whatever the element type of ``a``.
    """
    arr = _square_matrix(a)
    ctype = _complex_dtype(arr.dtype)
    with _lapack_errors():
        values, vectors = scipy.linalg.eig(arr, right=True)
    return values.astype(ctype), vectors.astype(ctype)


def eigg(a, b) -> tuple[np.ndarray, np.ndarray]:
    """Generalised eigenvalues and right eigenvectors: ``a v = w b v``."""
    arr_a = _square_matrix(a)
    arr_b = _square_matrix(b)
    if arr_a.shape != arr_b.shape:
        raise IncompatibleShapeError(
            f"matrices differ in shape: {arr_a.shape} != {arr_b.shape}"
        )
    ctype = _complex_dtype(np.result_type(arr_a.dtype, arr_b.dtype))
    with _lapack_errors():
        values, vectors = scipy.linalg.eig(arr_a, arr_b, right=True)
    return values.astype(ctype), vectors.astype(ctype)


def eigvals(a) -> np.ndarray:
    """Eigenvalues of a square matrix, without eigenvectors."""
    arr = _square_matrix(a)
    ctype = _complex_dtype(arr.dtype)
    with _lapack_errors():
        values = scipy.linalg.eigvals(arr)
    return values.astype(ctype)