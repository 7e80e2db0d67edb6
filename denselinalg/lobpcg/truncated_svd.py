"""Truncated singular value decomposition built on LOBPCG."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..generate import random
from .lobpcg import Order, lobpcg


def _magnitude_correction(dtype: np.dtype) -> float:
    return 1.0e3 if np.dtype(dtype) == np.float32 else 1.0e6


@dataclass
class TruncatedSvdResult:
    """Eigenpairs of ``A^T A`` or ``A A^T``, not yet turned into singular pairs."""

    eigvals: np.ndarray
    eigvecs: np.ndarray
    problem: np.ndarray
    ngm: bool

    def _singular_values_with_indices(self) -> tuple[np.ndarray, list[int]]:
        vals = np.asarray(self.eigvals)
        order = sorted(range(vals.shape[0]), key=lambda i: -vals[i])
        dtype = vals.dtype if np.issubdtype(vals.dtype, np.floating) else np.float64
        cutoff = np.finfo(dtype).eps * _magnitude_correction(dtype) * vals[order[0]]
        indices = [i for i in order if vals[i] > cutoff]
        values = np.sqrt(vals[indices]).astype(dtype)
        return values, indices

    def values(self) -> np.ndarray:
        """Singular values in descending order."""
        values, _ = self._singular_values_with_indices()
        return values

    def values_vectors(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(u, sigma, v_t)`` with ``problem ~ u @ diag(sigma) @ v_t``."""
        values, indices = self._singular_values_with_indices()
        if self.ngm:
            v = self.eigvecs[:, indices]
            u = (self.problem @ v) / values
        else:
            u = self.eigvecs[:, indices]
            v = (self.problem.T @ u) / values
        return u, values, v.T


class TruncatedSvd:
    """The largest or smallest singular values and vectors of a dense matrix."""

    def __init__(self, problem, order, rng=None) -> None:
        arr = np.asarray(problem)
        if arr.ndim != 2:
            raise ValueError(f"expected a 2-D matrix, got {arr.ndim} dimensions")
        if not np.issubdtype(arr.dtype, np.floating):
            arr = arr.astype(np.float64)
        self.problem = arr
        self.order = Order(order)
        self._precision = 1e-5
        self._maxiter = arr.shape[0] * 2
        self._rng = rng if rng is not None else np.random.default_rng()

    def precision(self, precision: float) -> TruncatedSvd:
        """Set the convergence threshold on the singular values."""
        self._precision = float(precision)
        return self

    def maxiter(self, maxiter: int) -> TruncatedSvd:
        """Set the maximal number of LOBPCG iterations."""
        self._maxiter = int(maxiter)
        return self

    def decompose(self, num: int) -> TruncatedSvdResult:
        """Compute ``num`` singular triplets."""
        if num < 1:
            raise ValueError(
                "The number of singular values to compute should be larger than zero!"
            )
        problem = self.problem
        n, m = problem.shape
        x = random((min(n, m), num), np.float32, self._rng).astype(problem.dtype)
        # The eigenvalues are squared singular values, so the precision is too.
        precision = self._precision * self._precision

        if n > m:

            def operator(block: np.ndarray) -> np.ndarray:
                return problem.T @ (problem @ block)

        else:

            def operator(block: np.ndarray) -> np.ndarray:
                return problem @ (problem.T @ block)

        result = lobpcg(
            operator, x, None, None, precision, self._maxiter, self.order
        )
        if not result.has_result:
            raise result.error
        return TruncatedSvdResult(
            eigvals=result.eigvals,
            eigvecs=result.eigvecs,
            problem=problem,
            ngm=n > m,
        )