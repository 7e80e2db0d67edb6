import pytest

from denselinalg.error import (
    IncompatibleShapeError,
    InvalidStrideError,
    LapackError,
    LinalgError,
    MemoryNotContiguousError,
    NotSquareError,
    NotStandardShapeError,
)


def test_not_square_message_and_fields():
    err = NotSquareError(2, 3)
    assert str(err) == "Not square: rows(2) != cols(3)"
    assert (err.rows, err.cols) == (2, 3)


def test_invalid_stride_message():
    err = InvalidStrideError(s0=3, s1=-1)
    assert str(err) == "invalid stride: s0=3, s1=-1"
    assert (err.s0, err.s1) == (3, -1)


def test_not_standard_shape_message():
    err = NotStandardShapeError("QR", 2, 3)
    assert str(err) == "QR cannot be made from a (2, 3) matrix"


def test_lapack_error_keeps_code():
    err = LapackError(7)
    assert err.return_code == 7
    assert "7" in str(err)


@pytest.mark.parametrize(
    "error",
    [
        NotSquareError(1, 2),
        InvalidStrideError(1, 2),
        MemoryNotContiguousError(),
        NotStandardShapeError("X", 1, 2),
        IncompatibleShapeError(),
        LapackError(1),
    ],
)
def test_all_errors_caught_as_linalg_error(error):
    with pytest.raises(LinalgError) as info:
        raise error
    assert info.value is error


def test_incompatible_shape_custom_message():
    err = IncompatibleShapeError("rows differ")
    assert "rows differ" in str(err)
    assert isinstance(err, LinalgError)