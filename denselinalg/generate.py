"""Helpers that build matrices, mostly random ones for tests."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .error import IncompatibleShapeError
from .qr import qr


def _rng(rng) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def conjugate(a) -> np.ndarray:
    """Hermitian conjugate (conjugate transpose) as a new array."""
    return np.ascontiguousarray(np.asarray(a).T.conj())


def random(shape, dtype=np.float64, rng=None) -> np.ndarray:
    """Array with elements uniform in [0, 1); complex types get both parts so."""
    gen = _rng(rng)
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.complexfloating):
        values = gen.random(shape) + 1j * gen.random(shape)
    else:
        values = gen.random(shape)
    return values.astype(dtype)


def random_unitary(n, dtype=np.float64, rng=None) -> np.ndarray:
    """Random unitary matrix from a QR decomposition (not uniformly distributed)."""
    q, _ = qr(random((n, n), dtype, rng))
    return q


def random_regular(n, dtype=np.float64, rng=None) -> np.ndarray:
    """Random non-singular matrix (not uniformly distributed)."""
    q, r = qr(random((n, n), dtype, rng))
    idx = np.arange(n)
    r[idx, idx] = 1 + np.abs(r[idx, idx])
    return q @ r


def random_hermite(n, dtype=np.float64, rng=None) -> np.ndarray:
    """Random Hermitian matrix."""
    a = random((n, n), dtype, rng)
    lower = np.tril(a, -1)
    diag = np.diag(a + a.conj())
    return lower + lower.T.conj() + np.diag(diag)


def random_hpd(n, dtype=np.float64, rng=None) -> np.ndarray:
    """Random Hermitian positive-definite matrix with eigenvalues at least one."""
    a = random((n, n), dtype, rng)
    return np.eye(n, dtype=a.dtype) + conjugate(a) @ a


def from_diag(d) -> np.ndarray:
    """Square matrix with ``d`` on the diagonal and zeros elsewhere."""
    values = np.asarray(d)
    if values.ndim != 1:
        raise ValueError("diagonal must be 1-D")
    return np.diag(values)


def _stack(xs: Sequence, axis: int) -> np.ndarray:
    vectors = [np.asarray(x) for x in xs]
    if not vectors:
        raise IncompatibleShapeError("cannot stack an empty sequence")
    if any(v.ndim != 1 for v in vectors):
        raise IncompatibleShapeError("only 1-D vectors can be stacked")
    if len({v.shape[0] for v in vectors}) != 1:
        raise IncompatibleShapeError("vectors have different lengths")
    return np.stack(vectors, axis=axis)


def hstack(xs) -> np.ndarray:
    """Place vectors side by side as the columns of a matrix."""
    return _stack(xs, axis=1)


def vstack(xs) -> np.ndarray:
    """Place vectors one above another as the rows of a matrix."""
    return _stack(xs, axis=0)