import numpy as np
import pytest

from denselinalg.eig import eig, eigg, eigvals
from denselinalg.error import IncompatibleShapeError, NotSquareError

DOC_MATRIX = np.array(
    [
        [-1.01, 0.86, -4.60, 3.31, -4.81],
        [3.98, 0.53, -7.04, 5.29, 3.55],
        [3.30, 8.26, -3.89, 8.20, -1.51],
        [4.43, 4.96, -7.66, -7.33, 6.18],
        [7.31, -6.43, -6.16, 2.47, 5.58],
    ]
)


def test_eig_documented_example():
    values, vectors = eig(DOC_MATRIX)
    a = DOC_MATRIX.astype(complex)
    for e, vec in zip(values, vectors.T):
        assert np.linalg.norm(a @ vec - e * vec) < 1e-5


def test_eig_results_are_complex():
    values, vectors = eig(np.diag([1.0, 2.0]))
    assert values.dtype == np.complex128
    assert vectors.dtype == np.complex128
    assert sorted(values.real) == [1.0, 2.0]


def test_eig_complex_matrix():
    rng = np.random.default_rng(1)
    a = rng.random((4, 4)) + 1j * rng.random((4, 4))
    values, vectors = eig(a)
    assert np.allclose(a @ vectors, vectors * values)


def test_eigvals_match_eig():
    values = eigvals(DOC_MATRIX)
    full, _ = eig(DOC_MATRIX)
    assert np.allclose(np.sort_complex(values), np.sort_complex(full))


def test_eig_does_not_modify_input():
    a = DOC_MATRIX.copy()
    eig(a)
    assert np.array_equal(a, DOC_MATRIX)


def test_eigg_documented_example():
    s = 1.0 / np.sqrt(2.0)
    a = np.array([[s, 0.0], [0.0, 1.0]])
    b = np.array([[0.0, 1.0], [-s, 0.0]])
    values, vectors = eigg(a, b)
    for e, vec in zip(values, vectors.T):
        assert np.linalg.norm(a @ vec - e * (b @ vec)) < 1e-10


def test_eigg_shape_mismatch():
    with pytest.raises(IncompatibleShapeError):
        eigg(np.eye(2), np.eye(3))


@pytest.mark.parametrize("func", [eig, eigvals])
def test_not_square(func):
    with pytest.raises(NotSquareError):
        func(np.ones((2, 3)))


def test_eigg_not_square_b():
    with pytest.raises(NotSquareError):
        eigg(np.eye(2), np.ones((2, 3)))