import numpy as np
import pytest
import scipy.linalg

from denselinalg.error import LinalgError
from denselinalg.generate import random
from denselinalg.lobpcg.lobpcg import (
    LobpcgResult,
    Order,
    apply_constraints,
    lobpcg,
    mask_columns,
    orthonormalize,
    sorted_eig,
)
from denselinalg.qr import qr


def close_l2(a, b, rtol):
    a = np.asarray(a)
    b = np.asarray(b)
    assert np.linalg.norm(a - b) / np.linalg.norm(b) < rtol


def test_sorted_eigen():
    rng = np.random.default_rng(1)
    matrix = random((10, 10), rng=rng) * 10.0
    matrix = matrix.T @ matrix
    vals, vecs = sorted_eig(matrix, None, 10, Order.Largest)
    rec = vecs @ np.diag(vals) @ vecs.T
    close_l2(matrix, rec, 1e-5)
    assert np.all(np.diff(vals) <= 0)


def test_sorted_eigen_smallest_truncated():
    a = np.diag([3.0, 1.0, 2.0, 5.0])
    vals, vecs = sorted_eig(a, None, 2, Order.Smallest)
    np.testing.assert_allclose(vals, [1.0, 2.0])
    assert vecs.shape == (4, 2)
    vals, _ = sorted_eig(a, None, 2, Order.Largest)
    np.testing.assert_allclose(vals, [5.0, 3.0])


def test_sorted_eigen_generalized():
    a = np.diag([2.0, 6.0])
    b = np.diag([1.0, 2.0])
    vals, _ = sorted_eig(a, b, 2, Order.Smallest)
    np.testing.assert_allclose(vals, [2.0, 3.0])


def test_masking():
    rng = np.random.default_rng(2)
    matrix = random((10, 5), rng=rng) * 10.0
    masked = mask_columns(matrix, [True, True, False, True, False])
    assert masked.shape == (10, 3)
    close_l2(masked[:, 2], matrix[:, 3], 1e-12)


def test_masking_wrong_length():
    with pytest.raises(ValueError):
        mask_columns(np.zeros((3, 2)), [True])


def test_orthonormalize():
    rng = np.random.default_rng(3)
    matrix = random((10, 10), rng=rng) * 10.0
    n, l = orthonormalize(matrix.copy())
    close_l2(n @ n.T, np.eye(10), 1e-2)
    _, r = qr(matrix)
    close_l2(np.abs(r), np.abs(l.T), 1e-2)


def test_orthonormalize_rank_deficient():
    with pytest.raises(LinalgError):
        orthonormalize(np.zeros((4, 2)))


def test_apply_constraints_orthogonal():
    rng = np.random.default_rng(4)
    y = random((6, 2), rng=rng)
    v = random((6, 3), rng=rng)
    fac = scipy.linalg.cho_factor(y.T @ y, lower=True)
    apply_constraints(v, fac, y)
    assert np.abs(y.T @ v).max() < 1e-10


def check_eigenvalues(a, order, num, ground_truth, seed):
    close_l2(a, a.T, 1e-5)
    n = a.shape[0]
    x = random((n, num), rng=np.random.default_rng(seed))
    result = lobpcg(lambda v: a @ v, x, None, None, 1e-5, n * 2, order)
    assert result.has_result
    for norm_value in result.residual_norms:
        assert norm_value <= 1e-5
    close_l2(np.asarray(ground_truth), result.eigvals, num * 5e-4)


def test_eigsolver_diag():
    a = np.diag(np.arange(1.0, 21.0))
    check_eigenvalues(a, Order.Largest, 3, [20.0, 19.0, 18.0], 5)
    check_eigenvalues(a, Order.Smallest, 3, [1.0, 2.0, 3.0], 6)


def test_eigsolver_constructed():
    n = 50
    tmp = random((n, n), rng=np.random.default_rng(7))
    v, _ = orthonormalize(tmp)
    t = np.diag(np.linspace(float(n), -float(n), n))
    a = v @ t @ v.T
    a = (a + a.T) / 2
    check_eigenvalues(a, Order.Largest, 5, [50.0, 48.0, 46.0, 44.0, 42.0], 8)
    check_eigenvalues(a, Order.Smallest, 5, [-50.0, -48.0, -46.0, -44.0, -42.0], 9)


def test_eigsolver_constrained():
    a = np.diag(np.arange(1.0, 11.0))
    x = random((10, 1), rng=np.random.default_rng(10))
    y = np.zeros((10, 2))
    y[0, 0] = 1.0
    y[1, 1] = 1.0
    result = lobpcg(lambda v: a @ v, x, None, y, 1e-10, 50, Order.Smallest)
    assert result.has_result
    for norm_value in result.residual_norms:
        assert norm_value <= 0.01
    close_l2(result.eigvals, np.array([3.0]), 1e-10)
    expected = np.zeros(10)
    expected[2] = 1.0
    close_l2(np.abs(result.eigvecs[:, 0]), expected, 1e-5)


def test_no_result_for_dependent_guess():
    a = np.diag(np.arange(1.0, 6.0))
    result = lobpcg(lambda v: a @ v, np.zeros((5, 2)), None, None, 1e-5, 10, Order.Largest)
    assert isinstance(result, LobpcgResult)
    assert not result.has_result
    assert isinstance(result.error, LinalgError)


def test_too_many_vectors_rejected():
    a = np.eye(2)
    with pytest.raises(ValueError):
        lobpcg(lambda v: a @ v, np.ones((2, 3)), None, None, 1e-5, 10, Order.Largest)