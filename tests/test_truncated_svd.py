import numpy as np
import pytest

from denselinalg.generate import random
from denselinalg.lobpcg.lobpcg import Order
from denselinalg.lobpcg.truncated_svd import TruncatedSvd, TruncatedSvdResult


def _rel_err(a, b):
    return np.linalg.norm(np.asarray(a) - np.asarray(b)) / np.linalg.norm(b)


def test_truncated_svd():
    a = np.array([[3.0, 2.0, 2.0], [2.0, 3.0, -2.0]])
    res = (
        TruncatedSvd(a, Order.Largest, rng=np.random.default_rng(1))
        .precision(1e-5)
        .maxiter(10)
        .decompose(2)
    )
    _, sigma, _ = res.values_vectors()
    assert _rel_err(sigma, [5.0, 3.0]) < 1e-5


def test_truncated_svd_random():
    rng = np.random.default_rng(2)
    a = random((50, 10), rng=rng)
    res = (
        TruncatedSvd(a, Order.Largest, rng=rng)
        .precision(1e-5)
        .maxiter(10)
        .decompose(10)
    )
    u, sigma, v_t = res.values_vectors()
    reconstructed = u @ np.diag(sigma) @ v_t
    assert _rel_err(reconstructed, a) < 1e-5


def test_values_match_values_vectors():
    a = np.array([[3.0, 2.0, 2.0], [2.0, 3.0, -2.0]])
    res = TruncatedSvd(a, Order.Largest, rng=np.random.default_rng(3)).decompose(2)
    _, sigma, _ = res.values_vectors()
    assert np.allclose(res.values(), sigma)
    assert list(res.values()) == sorted(res.values(), reverse=True)


def test_left_vectors_orthonormal_tall_matrix():
    rng = np.random.default_rng(4)
    a = random((20, 5), rng=rng)
    res = TruncatedSvd(a, Order.Largest, rng=rng).maxiter(20).decompose(5)
    u, sigma, _ = res.values_vectors()
    assert np.allclose(u.T @ u, np.eye(sigma.shape[0]), atol=1e-6)
    assert np.allclose(sigma, np.linalg.svd(a, compute_uv=False), atol=1e-6)


def test_small_eigenvalues_are_cut_off():
    res = TruncatedSvdResult(
        eigvals=np.array([4.0, 1e-20, 9.0]),
        eigvecs=np.eye(3),
        problem=np.eye(3),
        ngm=False,
    )
    assert np.allclose(res.values(), [3.0, 2.0])


def test_zero_count_raises():
    with pytest.raises(ValueError):
        TruncatedSvd(np.eye(3), Order.Largest).decompose(0)


def test_builder_returns_same_instance():
    svd = TruncatedSvd(np.eye(3), Order.Largest)
    assert svd.precision(1e-3) is svd
    assert svd.maxiter(5) is svd