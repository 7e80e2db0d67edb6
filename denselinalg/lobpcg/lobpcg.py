"""Locally Optimal Block Preconditioned Conjugate Gradient eigensolver.

LOBPCG finds a few of the largest or smallest eigenpairs of a large
symmetric (positive definite) problem, given only the action of the matrix.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
import scipy.linalg

from ..eigh import eigh, eigh_generalized
from ..error import LapackError, LinalgError
from ..norm import norm_l2
from ..qr import UPLO


class Order(enum.Enum):
    """Whether to look for the largest or the smallest eigenvalues."""

    Largest = "largest"
    Smallest = "smallest"


TruncatedOrder = Order


@dataclass
class LobpcgResult:
    """Outcome of ``lobpcg``.

    When the solver converged, ``error`` is ``None``. When it failed part way,
    ``error`` holds the failure and the best eigenpairs found so far are still
    given. When it failed before producing anything, only ``error`` is set.
    """

    eigvals: np.ndarray | None
    eigvecs: np.ndarray | None
    residual_norms: list[float] | None
    error: LinalgError | None = None

    @property
    def has_result(self) -> bool:
        """True when eigenpairs are available, converged or not."""
        return self.eigvals is not None

    @property
    def converged(self) -> bool:
        """True when the solver finished without error."""
        return self.error is None and self.eigvals is not None


def sorted_eig(a, b, size: int, order) -> tuple[np.ndarray, np.ndarray]:
    """Solve the full (generalised) symmetric eigenproblem, sort and truncate.

    Returns the ``size`` largest eigenvalues in descending order or the
    ``size`` smallest in ascending order, with their eigenvectors as columns.
    """
    order = Order(order)
    arr_a = np.asarray(a)
    if not np.all(np.isfinite(arr_a)):
        raise LapackError(1, "matrix contains non-finite values")
    n = arr_a.shape[0]
    if size > n:
        raise ValueError(f"cannot take {size} eigenpairs of a {n} x {n} problem")
    if b is None:
        vals, vecs = eigh(arr_a, UPLO.Upper)
    else:
        arr_b = np.asarray(b)
        if not np.all(np.isfinite(arr_b)):
            raise LapackError(1, "matrix contains non-finite values")
        vals, vecs = eigh_generalized(arr_a, arr_b, UPLO.Upper)
    if order is Order.Largest:
        return vals[n - size:][::-1].copy(), vecs[:, n - size:][:, ::-1].copy()
    return vals[:size].copy(), vecs[:, :size].copy()


def mask_columns(matrix, mask: Sequence[bool]) -> np.ndarray:
    """Return a copy of the columns of ``matrix`` whose mask entry is true."""
    arr = np.asarray(matrix)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D array, got {arr.ndim} dimensions")
    flags = np.asarray(mask, dtype=bool)
    if flags.shape != (arr.shape[1],):
        raise ValueError(
            f"mask length {flags.shape[0] if flags.ndim else 0} does not match "
            f"{arr.shape[1]} columns"
        )
    return arr[:, flags]


def apply_constraints(v, cholesky_yy, y) -> None:
    """Make the columns of ``v`` orthogonal to those of ``y``, in place.

    ``cholesky_yy`` is the Cholesky factorisation of ``y.T @ y`` as returned
    by ``scipy.linalg.cho_factor``.
    """
    y = np.asarray(y)
    gram_yv = y.T @ v
    u = scipy.linalg.cho_solve(cholesky_yy, gram_yv)
    v -= y @ u


def orthonormalize(v) -> tuple[np.ndarray, np.ndarray]:
    """Orthonormalize the columns of ``v`` by a Cholesky factorisation.

    Returns ``(u, l)`` with orthonormal ``u`` and lower-triangular ``l`` such
    that ``v = u @ l.T``; ``l.T`` is the R factor of a QR decomposition.
    """
    arr = np.asarray(v)
    gram_vv = arr.T @ arr
    if not np.all(np.isfinite(gram_vv)):
        raise LapackError(1, "Gram matrix contains non-finite values")
    try:
        factor = scipy.linalg.cholesky(gram_vv, lower=True)
    except np.linalg.LinAlgError as exc:
        raise LapackError(1, str(exc)) from exc
    try:
        u = scipy.linalg.solve_triangular(factor, arr.T, lower=True).T
    except np.linalg.LinAlgError as exc:
        raise LapackError(1, str(exc)) from exc
    return u, factor


def _float_dtype(arr: np.ndarray) -> np.dtype:
    if np.issubdtype(arr.dtype, np.floating):
        return arr.dtype
    return np.dtype(np.float64)


def _p_ap_span(previous, activemask):
    """Masked and orthonormalized P with AP scaled to match, or None."""
    if previous is None:
        return None
    p, ap = previous
    active_p = mask_columns(p, activemask)
    active_ap = mask_columns(ap, activemask)
    try:
        active_p, p_r = orthonormalize(active_p)
        active_ap = scipy.linalg.solve_triangular(p_r, active_ap.T, lower=True).T
    except (LinalgError, np.linalg.LinAlgError, ValueError):
        return None
    return active_p, active_ap


def lobpcg(
    a: Callable[[np.ndarray], np.ndarray],
    x,
    m: Callable[[np.ndarray], None] | None,
    y,
    tol: float,
    maxiter: int,
    order,
) -> LobpcgResult:
    """Find ``x.shape[1]`` extreme eigenpairs of the operator ``a``.

    ``a`` maps an (n, k) block to the operator applied to it; ``x`` is the
    (n, k) initial guess; ``m`` is a preconditioner that works on a block in
    place (``None`` for none); ``y`` is an (n, j) full-rank constraint block
    whose column space the search avoids, or ``None``. Iteration stops once
    every residual norm is at most ``tol`` or after ``min(10 n, maxiter)``
    steps; the best result seen is returned.
    """
    order = Order(order)
    x = np.asarray(x)
    if x.ndim != 2:
        raise ValueError(f"expected a 2-D initial guess, got {x.ndim} dimensions")
    x = np.array(x, dtype=_float_dtype(x))
    n, size_x = x.shape
    if size_x > n:
        raise ValueError(f"cannot find {size_x} eigenpairs in dimension {n}")

    iterations = min(n * 10, maxiter)
    tol = float(tol)

    cholesky_yy = None
    if y is not None:
        y = np.asarray(y)
        try:
            cholesky_yy = scipy.linalg.cho_factor(y.T @ y, lower=True)
        except np.linalg.LinAlgError as exc:
            raise LapackError(1, str(exc)) from exc
        apply_constraints(x, cholesky_yy, y)

    try:
        x, _ = orthonormalize(x)
    except LinalgError as err:
        return LobpcgResult(None, None, None, err)

    ax = a(x)
    xax = x.T @ ax
    try:
        lam, eig_block = sorted_eig(xax, None, size_x, order)
    except LinalgError as err:
        return LobpcgResult(None, None, None, err)

    x = x @ eig_block
    ax = ax @ eig_block

    activemask = [True] * size_x
    best: tuple[np.ndarray, np.ndarray, list[float]] | None = None
    previous_block_size = size_x
    ident = np.eye(size_x, dtype=x.dtype)
    ident0 = np.eye(size_x, dtype=x.dtype)
    previous_p_ap = None
    explicit_gram_flag = True
    max_rnorm_float = 1.0 if np.finfo(x.dtype).eps > 1e-8 else 1.0e-8
    final_error: LinalgError | None = None

    while True:
        lambda_diag = np.diag(lam)
        r = ax - x @ lambda_diag

        residual_norms = [norm_l2(col) for col in r.T]
        sum_rnorm = sum(residual_norms)
        if best is None or sum(best[2]) > sum_rnorm:
            best = (lam.copy(), x.copy(), list(residual_norms))

        activemask = [
            norm_value > tol and active
            for norm_value, active in zip(residual_norms, activemask)
        ]
        current_block_size = sum(activemask)
        if current_block_size != previous_block_size:
            previous_block_size = current_block_size
            ident = np.eye(current_block_size, dtype=x.dtype)

        if current_block_size == 0 or iterations == 0:
            break

        active_block_r = mask_columns(r, activemask)
        if m is not None:
            m(active_block_r)
        if cholesky_yy is not None:
            apply_constraints(active_block_r, cholesky_yy, y)
        active_block_r -= x @ (x.T @ active_block_r)

        try:
            r, _ = orthonormalize(active_block_r)
        except LinalgError as err:
            final_error = err
            break

        ar = a(r)

        max_norm = max(residual_norms, default=-np.inf)
        explicit_gram_flag = max_norm <= max_rnorm_float or explicit_gram_flag

        xar = x.T @ ar
        rar = r.T @ ar

        if explicit_gram_flag:
            rar = (rar + rar.T) / 2
            xax = x.T @ ax
            xax = (xax + xax.T) / 2
            xx = x.T @ x
            rr = r.T @ r
            xr = x.T @ r
        else:
            xax = lambda_diag
            xx = ident0.copy()
            rr = ident.copy()
            xr = np.zeros((size_x, current_block_size), dtype=x.dtype)

        p_ap = _p_ap_span(previous_p_ap, activemask)

        result = None
        if p_ap is not None:
            active_p, active_ap = p_ap
            xap = x.T @ active_ap
            rap = r.T @ active_ap
            pap = active_p.T @ active_ap
            xp = x.T @ active_p
            rp = r.T @ active_p
            if explicit_gram_flag:
                pap = (pap + pap.T) / 2
                pp = active_p.T @ active_p
            else:
                pp = ident.copy()
            try:
                result = sorted_eig(
                    np.block([[xax, xar, xap], [xar.T, rar, rap], [xap.T, rap.T, pap]]),
                    np.block([[xx, xr, xp], [xr.T, rr, rp], [xp.T, rp.T, pp]]),
                    size_x,
                    order,
                )
            except LinalgError:
                result = None

        if result is None:
            p_ap = None
            try:
                result = sorted_eig(
                    np.block([[xax, xar], [xar.T, rar]]),
                    np.block([[xx, xr], [xr.T, rr]]),
                    size_x,
                    order,
                )
            except LinalgError as err:
                final_error = err
                break

        lam, eig_vecs = result

        tau = eig_vecs[:size_x]
        if p_ap is not None:
            active_p, active_ap = p_ap
            alpha = eig_vecs[size_x:size_x + current_block_size]
            gamma = eig_vecs[size_x + current_block_size:]
            p = r @ alpha + active_p @ gamma
            ap = ar @ alpha + active_ap @ gamma
        else:
            alpha = eig_vecs[size_x:]
            p = r @ alpha
            ap = ar @ alpha

        x = x @ tau + p
        ax = ax @ tau + ap
        previous_p_ap = (p, ap)
        iterations -= 1

    vals, vecs, rnorm = best
    return LobpcgResult(vals, vecs, [float(v) for v in rnorm], final_error)