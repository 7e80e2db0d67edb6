"""Truncated eigenvalue decomposition built on LOBPCG."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from ..generate import random
from .lobpcg import LobpcgResult, Order, lobpcg

_CONVERGENCE_LIMIT = 0.1


def _float_matrix(problem) -> np.ndarray:
    arr = np.asarray(problem)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D matrix, got {arr.ndim} dimensions")
    if not np.issubdtype(arr.dtype, np.floating):
        arr = arr.astype(np.float64)
    return arr


class TruncatedEig:
    """A few extreme eigenpairs of a symmetric matrix.

    The setters return the instance so calls can be chained. Iterating yields
    one ``(eigenvalues, eigenvectors)`` pair at a time, each new pair found
    orthogonal to all earlier ones; iteration ends when a pair fails to
    converge or every eigenpair has been produced.
    """

    def __init__(self, problem, order, rng=None) -> None:
        self.problem = _float_matrix(problem)
        self.order = Order(order)
        self.constraints: np.ndarray | None = None
        self.preconditioner: np.ndarray | None = None
        self._precision = 1e-5
        self._maxiter = self.problem.shape[0] * 2
        self._rng = rng if rng is not None else np.random.default_rng()

    def precision(self, precision: float) -> TruncatedEig:
        """Set the residual norm below which an eigenpair counts as converged."""
        self._precision = float(precision)
        return self

    def maxiter(self, maxiter: int) -> TruncatedEig:
        """Set the maximal number of LOBPCG iterations."""
        self._maxiter = int(maxiter)
        return self

    def orthogonal_to(self, constraints) -> TruncatedEig:
        """Search only in the orthogonal complement of these columns."""
        self.constraints = np.asarray(constraints)
        return self

    def precondition_with(self, preconditioner) -> TruncatedEig:
        """Use this matrix, approximating the inverse of the problem, as preconditioner."""
        self.preconditioner = np.asarray(preconditioner)
        return self

    def _run(self, num: int, constraints) -> LobpcgResult:
        x = random((self.problem.shape[0], num), np.float64, self._rng).astype(
            self.problem.dtype
        )
        problem = self.problem
        preconditioner = self.preconditioner

        def operator(block: np.ndarray) -> np.ndarray:
            return problem @ block

        precondition = None
        if preconditioner is not None:

            def precondition(block: np.ndarray) -> None:
                block[...] = preconditioner @ block

        return lobpcg(
            operator,
            x,
            precondition,
            None if constraints is None else constraints.copy(),
            self._precision,
            self._maxiter,
            self.order,
        )

    def decompose(self, num: int) -> LobpcgResult:
        """Compute ``num`` eigenpairs at once."""
        return self._run(num, self.constraints)

    def __iter__(self) -> Iterator[tuple[np.ndarray, np.ndarray]]:
        constraints = self.constraints
        remaining = self.problem.shape[0]
        step_size = 1
        while remaining > 0:
            step = min(step_size, remaining)
            result = self._run(step, constraints)
            if not result.has_result:
                return
            if any(r > _CONVERGENCE_LIMIT for r in result.residual_norms):
                return
            vecs = result.eigvecs
            constraints = (
                vecs.copy() if constraints is None else np.hstack([constraints, vecs])
            )
            remaining -= step
            yield result.eigvals, vecs