"""Eigenvalue decomposition of Hermitian (real symmetric) matrices."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np
import scipy.linalg

from .error import IncompatibleShapeError, LapackError
from .layout import ensure_square
from .qr import UPLO


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


def _is_lower(uplo) -> bool:
    return UPLO(uplo) is UPLO.Lower


def eigh(a, uplo=UPLO.Upper) -> tuple[np.ndarray, np.ndarray]:
    """Ascending real eigenvalues and orthonormal eigenvectors (as columns).

    Only the triangle of ``a`` named by ``uplo`` is read.
    """
    arr = _square_matrix(a)
    with _lapack_errors():
        return scipy.linalg.eigh(arr, lower=_is_lower(uplo))


def eigh_generalized(a, b, uplo=UPLO.Upper) -> tuple[np.ndarray, np.ndarray]:
    """Solve ``a v = w b v`` for Hermitian ``a`` and Hermitian positive-definite ``b``."""
    arr_a = _square_matrix(a)
    arr_b = _square_matrix(b)
    if arr_a.shape != arr_b.shape:
        raise IncompatibleShapeError(
            f"matrices differ in shape: {arr_a.shape} != {arr_b.shape}"
        )
    with _lapack_errors():
        return scipy.linalg.eigh(arr_a, arr_b, lower=_is_lower(uplo))


def eigvalsh(a, uplo=UPLO.Upper) -> np.ndarray:
    """Ascending real eigenvalues of a Hermitian matrix."""
    arr = _square_matrix(a)
    with _lapack_errors():
        return scipy.linalg.eigh(arr, lower=_is_lower(uplo), eigvals_only=True)


def ssqrt(a, uplo=UPLO.Upper) -> np.ndarray:
    """Symmetric square root ``V diag(sqrt(w)) V^H`` built from ``eigh``.

    Negative eigenvalues give NaN entries.
    """
    values, vectors = eigh(a, uplo)
    with np.errstate(invalid="ignore"):
        roots = np.sqrt(values)
    return (vectors * roots) @ vectors.conj().T