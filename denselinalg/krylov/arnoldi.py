"""Arnoldi iteration over a linear operator."""

from __future__ import annotations

import numpy as np

from ..norm import norm_l2
from ..operator import LinearOperator, MatrixOperator
from .base import Orthogonalizer
from .householder import Householder
from .mgs import MGS


class Arnoldi:
    """Iterator that extends a Krylov basis one vector per step.

    Each step yields the new column of the Hessenberg matrix; iteration stops
    once the next Krylov vector is linearly dependent on the basis.
    """

    def __init__(self, a, v, ortho: Orthogonalizer) -> None:
        if len(ortho) != 0:
            raise ValueError("the orthogonalizer must start empty")
        if not ortho.tolerance < 1:
            raise ValueError("the tolerance must be smaller than one")
        self._op = a if isinstance(a, LinearOperator) else MatrixOperator(a)
        arr = np.asarray(v)
        dtypes = [arr.dtype, np.float64]
        if isinstance(self._op, MatrixOperator):
            dtypes.append(self._op.matrix.dtype)
        self._v = np.array(arr, dtype=np.result_type(*dtypes))
        # Normalise first: |v| may be below the orthogonalizer's tolerance.
        self._v /= norm_l2(self._v)
        ortho.append(self._v)
        self._ortho = ortho
        self._h: list[np.ndarray] = []
        self._done = False

    def dim(self) -> int:
        """Dimension of the Krylov subspace built so far."""
        return len(self._ortho)

    def __iter__(self) -> Arnoldi:
        return self

    def __next__(self) -> np.ndarray:
        if self._done:
            raise StopIteration
        self._op.apply_mut(self._v)
        result = self._ortho.div_append(self._v)
        with np.errstate(divide="ignore", invalid="ignore"):
            self._v /= norm_l2(self._v)
        self._h.append(result.coefficients.copy())
        if result.dependent:
            self._done = True
            raise StopIteration
        return result.coefficients

    def complete(self) -> tuple[np.ndarray, np.ndarray]:
        """Run to convergence and return the basis Q and Hessenberg matrix H."""
        for _ in self:
            pass
        q = self._ortho.get_q()
        n = len(self._h)
        dtype = np.result_type(*self._h) if self._h else np.dtype(np.float64)
        h = np.zeros((n, n), dtype=dtype)
        for i, column in enumerate(self._h):
            m = min(n, i + 2)
            h[:m, i] = column[:m]
        return q, h


def arnoldi_householder(a, v, tol: float) -> tuple[np.ndarray, np.ndarray]:
    """Arnoldi iteration using Householder reflections."""
    return Arnoldi(a, v, Householder(len(v), tol)).complete()


def arnoldi_mgs(a, v, tol: float) -> tuple[np.ndarray, np.ndarray]:
    """Arnoldi iteration using modified Gram-Schmidt."""
    return Arnoldi(a, v, MGS(len(v), tol)).complete()