"""Orthogonalization by Householder reflections."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from ..inner import inner
from ..norm import norm_l2
from .base import AppendResult, Orthogonalizer, qr


def _phase(x):
    """``x / |x|``, or one when ``x`` is zero."""
    mag = abs(x)
    return x / mag if mag != 0 else 1.0


def calc_reflector(x) -> None:
    """Turn vector ``x`` in place into the unit Householder reflector for it."""
    if x.shape[0] == 0:
        raise ValueError("cannot build a reflector from an empty vector")
    nrm = norm_l2(x)
    if nrm == 0:
        raise ValueError("cannot build a reflector from a zero vector")
    alpha = -_phase(x[0]) * nrm
    x[0] -= alpha
    x /= norm_l2(x)


def reflect(w, a) -> None:
    """Apply ``P = I - 2 w w^H`` to ``a`` in place."""
    w = np.asarray(w)
    if w.shape != a.shape:
        raise ValueError(f"length mismatch: {w.shape} != {a.shape}")
    c = 2 * inner(w, a)
    a -= c * w


class Householder(Orthogonalizer):
    """Iterative orthogonalizer that stores Householder reflectors."""

    def __init__(self, dim: int, tol: float) -> None:
        super().__init__(dim, tol)
        self._reflectors: list[np.ndarray] = []

    def __len__(self) -> int:
        return len(self._reflectors)

    def _fundamental_reflection(self, k: int, a: np.ndarray) -> None:
        reflect(self._reflectors[k][k:], a[k:])

    def forward_reflection(self, a) -> None:
        """Apply ``P_l ... P_1`` to ``a`` in place."""
        self._check_writable(a)
        for k in range(len(self._reflectors)):
            self._fundamental_reflection(k, a)

    def backward_reflection(self, a) -> None:
        """Apply ``P_1 ... P_l`` to ``a`` in place."""
        self._check_writable(a)
        for k in reversed(range(len(self._reflectors))):
            self._fundamental_reflection(k, a)

    def _compose_coefficients(self, a: np.ndarray) -> np.ndarray:
        k = len(self)
        res = norm_l2(a[k:])
        c = np.zeros(k + 1, dtype=a.dtype)
        c[:k] = a[:k]
        c[k] = -_phase(a[k]) * res if k < a.shape[0] else res
        return c

    def _construct_residual(self, a: np.ndarray) -> None:
        a[: len(self)] = 0
        self.backward_reflection(a)

    def decompose(self, a) -> np.ndarray:
        self._check_writable(a)
        self.forward_reflection(a)
        coef = self._compose_coefficients(a)
        self._construct_residual(a)
        return coef

    def coeff(self, a) -> np.ndarray:
        arr = self._owned(a)
        self.forward_reflection(arr)
        return self._compose_coefficients(arr)

    def _add(self, a: np.ndarray, keep_residual: bool) -> AppendResult:
        k = len(self)
        self.forward_reflection(a)
        coef = self._compose_coefficients(a)
        if abs(coef[k]) < self.tolerance:
            return AppendResult(coef, dependent=True)
        calc_reflector(a[k:])
        self._reflectors.append(a.copy())
        if keep_residual:
            self._construct_residual(a)
        return AppendResult(coef)

    def div_append(self, a) -> AppendResult:
        return self._add(self._check_writable(a), keep_residual=True)

    def append(self, a) -> AppendResult:
        return self._add(self._owned(a), keep_residual=False)

    def get_q(self) -> np.ndarray:
        if not self._reflectors:
            raise ValueError("the basis is empty")
        q = np.zeros((self.dim, len(self)), dtype=self._reflectors[0].dtype)
        for i in range(len(self)):
            col = q[:, i]
            col[i] = 1
            self.backward_reflection(col)
        return q


def householder(vectors: Iterable, dim: int, rtol: float, strategy) -> tuple[np.ndarray, np.ndarray]:
    """Online QR decomposition using Householder reflections."""
    return qr(vectors, Householder(dim, rtol), strategy)