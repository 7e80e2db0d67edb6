"""Linear operators acting on vectors and on the columns of matrices."""

from __future__ import annotations

import numpy as np

from .generate import hstack


class LinearOperator:
    """An action on vectors; subclasses override ``apply`` or ``apply_mut``."""

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if (
            cls.apply is LinearOperator.apply
            and cls.apply_mut is LinearOperator.apply_mut
        ):
            raise TypeError(f"{cls.__name__} must override apply or apply_mut")

    def apply(self, a) -> np.ndarray:
        """Return the operator applied to vector ``a``; ``a`` is unchanged."""
        result = np.array(a, copy=True)
        self.apply_mut(result)
        return result

    def apply_mut(self, a) -> None:
        """Overwrite vector ``a`` with the operator applied to it."""
        a[...] = self.apply(a)

    def apply2(self, a) -> np.ndarray:
        """Apply the operator to every column of ``a``, returning a new matrix."""
        return hstack([self.apply(col) for col in np.asarray(a).T])

    def apply2_mut(self, a) -> None:
        """Apply the operator to every column of ``a`` in place."""
        for j in range(a.shape[1]):
            self.apply_mut(a[:, j])


class MatrixOperator(LinearOperator):
    """A dense matrix used as a linear operator."""

    def __init__(self, matrix) -> None:
        self.matrix = np.asarray(matrix)

    def apply(self, a) -> np.ndarray:
        return self.matrix @ np.asarray(a)