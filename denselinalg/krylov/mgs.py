"""Orthogonalization by the modified Gram-Schmidt procedure."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from ..generate import hstack
from ..inner import inner
from ..norm import norm_l2
from .base import AppendResult, Orthogonalizer, qr


def _owned_copy(a) -> np.ndarray:
    arr = np.asarray(a)
    return np.array(arr, dtype=np.result_type(arr.dtype, np.float64), copy=True)


class MGS(Orthogonalizer):
    """Iterative orthogonalizer that stores the basis vectors themselves."""

    def __init__(self, dim: int, tol: float) -> None:
        super().__init__(dim, tol)
        self._basis: list[np.ndarray] = []

    def __len__(self) -> int:
        return len(self._basis)

    def decompose(self, a) -> np.ndarray:
        self._check_writable(a)
        dtype = np.result_type(a.dtype, *(q.dtype for q in self._basis))
        coef = np.zeros(len(self) + 1, dtype=dtype)
        for i, q in enumerate(self._basis):
            c = inner(q, a)
            a -= c * q
            coef[i] = c
        coef[-1] = norm_l2(a)
        return coef

    def coeff(self, a) -> np.ndarray:
        """Coefficients of ``a`` against the basis; ``a`` is left unchanged."""
        return self.decompose(_owned_copy(a))

    def append(self, a) -> AppendResult:
        """Add ``a`` to the basis if its residual exceeds the tolerance."""
        return self.div_append(_owned_copy(a))

    def div_append(self, a) -> AppendResult:
        coef = self.decompose(a)
        nrm = coef[-1].real
        if nrm < self.tolerance:
            return AppendResult(coef, dependent=True)
        a /= nrm
        self._basis.append(a.copy())
        return AppendResult(coef)

    def get_q(self) -> np.ndarray:
        if not self._basis:
            raise ValueError("the basis is empty")
        return hstack(self._basis)


def mgs(vectors: Iterable, dim: int, rtol: float, strategy) -> tuple[np.ndarray, np.ndarray]:
    """Online QR decomposition using modified Gram-Schmidt."""
    return qr(vectors, MGS(dim, rtol), strategy)