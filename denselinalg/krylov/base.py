"""Shared pieces of the Krylov-subspace tools: orthogonalizers and online QR."""

from __future__ import annotations

import abc
import enum
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np


@dataclass
class AppendResult:
    """Coefficients of a vector in the current basis, last entry the residual.

    ``dependent`` is true when the vector was not added because its residual
    fell below the tolerance of the orthogonalizer.
    """

    coefficients: np.ndarray
    dependent: bool = False

    def residual_norm(self) -> float:
        """Magnitude of the residual component (the last coefficient)."""
        return float(abs(self.coefficients[-1]))


class Strategy(enum.Enum):
    """What the online QR does with a linearly dependent vector."""

    Terminate = "terminate"
    """Stop at the first dependent vector."""
    Skip = "skip"
    """Drop dependent vectors and go on."""
    Full = "full"
    """Keep the coefficients of dependent vectors without extending Q."""


class Orthogonalizer(abc.ABC):
    """Builds an orthonormal basis from vectors of a fixed dimension."""

    def __init__(self, dim: int, tol: float) -> None:
        self.dim = int(dim)
        self.tolerance = tol

    @abc.abstractmethod
    def __len__(self) -> int:
        """Number of basis vectors held."""

    def is_full(self) -> bool:
        """True when the basis spans the whole space."""
        return len(self) == self.dim

    def is_empty(self) -> bool:
        """True when no basis vector has been added yet."""
        return len(self) == 0

    def _check_writable(self, a) -> np.ndarray:
        if not isinstance(a, np.ndarray) or a.ndim != 1:
            raise TypeError("expected a 1-D numpy array to work on in place")
        if not np.issubdtype(a.dtype, np.inexact):
            raise TypeError(f"expected a floating or complex array, got {a.dtype}")
        if a.shape[0] != self.dim:
            raise ValueError(
                f"vector length {a.shape[0]} does not match dimension {self.dim}"
            )
        return a

    def _owned(self, a) -> np.ndarray:
        arr = np.asarray(a)
        if arr.ndim != 1:
            raise ValueError(f"expected a 1-D vector, got {arr.ndim} dimensions")
        copy = np.array(arr, dtype=np.result_type(arr.dtype, np.float64))
        return self._check_writable(copy)

    @abc.abstractmethod
    def decompose(self, a) -> np.ndarray:
        """Split ``a`` into its span component and the orthogonal rest.

        ``a`` is overwritten with the orthogonal residual; the coefficients
        in the current basis (residual norm last) are returned.
        """

    def coeff(self, a) -> np.ndarray:
        """Coefficients of ``a`` in the current basis; ``a`` is unchanged."""
        return self.decompose(self._owned(a))

    def append(self, a) -> AppendResult:
        """Add ``a`` to the basis unless its residual is below the tolerance."""
        return self.div_append(self._owned(a))

    @abc.abstractmethod
    def div_append(self, a) -> AppendResult:
        """Like ``append``, but ``a`` is overwritten with its residual."""

    @abc.abstractmethod
    def get_q(self) -> np.ndarray:
        """The basis as the columns of a matrix."""


def qr(vectors: Iterable, ortho: Orthogonalizer, strategy) -> tuple[np.ndarray, np.ndarray]:
    """Online QR decomposition of a stream of vectors with ``ortho``."""
    strategy = Strategy(strategy)
    if len(ortho) != 0:
        raise ValueError("the orthogonalizer must start empty")
    coefs = []
    for a in vectors:
        result = ortho.append(a)
        if not result.dependent:
            coefs.append(result.coefficients)
        elif strategy is Strategy.Terminate:
            break
        elif strategy is Strategy.Full:
            coefs.append(result.coefficients)
    n = len(ortho)
    dtype = np.result_type(*coefs) if coefs else np.dtype(np.float64)
    r = np.zeros((n, len(coefs)), dtype=dtype)
    for j, c in enumerate(coefs):
        k = min(n, c.shape[0])
        r[:k, j] = c[:k]
    return ortho.get_q(), r