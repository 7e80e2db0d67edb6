import numpy as np
import pytest

from denselinalg.error import InvalidStrideError, MemoryNotContiguousError, NotSquareError
from denselinalg.layout import (
    LayoutOrder,
    MatrixLayout,
    as_allocated,
    ensure_square,
    layout,
    square_layout,
)


def test_c_layout():
    a = np.arange(6.0).reshape(2, 3)
    lay = layout(a)
    assert lay == MatrixLayout(LayoutOrder.C, 2, 3)
    assert lay.size() == a.shape


def test_f_layout():
    a = np.asfortranarray(np.arange(6.0).reshape(2, 3))
    lay = layout(a)
    assert lay.order is LayoutOrder.F
    assert lay.size() == a.shape


def test_transposed_view_is_fortran():
    a = np.arange(6.0).reshape(2, 3)
    lay = layout(a.T)
    assert lay.order is LayoutOrder.F
    assert lay.size() == a.T.shape


def test_strided_slice_is_rejected():
    a = np.arange(12.0).reshape(3, 4)
    with pytest.raises(InvalidStrideError) as info:
        layout(a[:, ::2])
    assert (info.value.s0, info.value.s1) == (4, 2)


def test_square_layout_rejects_rectangular():
    with pytest.raises(NotSquareError) as info:
        square_layout(np.zeros((2, 3)))
    assert (info.value.rows, info.value.cols) == (2, 3)


def test_square_layout_accepts_square():
    lay = square_layout(np.eye(4))
    assert lay.size() == (4, 4)


def test_ensure_square_ignores_strides():
    a = np.arange(16.0).reshape(4, 4)[::2, ::2]
    ensure_square(a)
    with pytest.raises(NotSquareError):
        ensure_square(a[:1])


def test_as_allocated_c_order():
    a = np.arange(6.0).reshape(2, 3)
    flat = as_allocated(a)
    np.testing.assert_array_equal(flat, a.ravel())
    assert np.shares_memory(flat, a)


def test_as_allocated_f_order():
    a = np.asfortranarray(np.arange(6.0).reshape(2, 3))
    flat = as_allocated(a)
    np.testing.assert_array_equal(flat, a.ravel(order="F"))
    assert np.shares_memory(flat, a)


def test_as_allocated_non_contiguous():
    a = np.arange(12.0).reshape(3, 4)
    with pytest.raises(MemoryNotContiguousError):
        as_allocated(a[:, ::2])


def test_layout_requires_matrix():
    with pytest.raises(ValueError):
        layout(np.zeros(3))