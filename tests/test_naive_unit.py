"""Tests for the pure Python reference implementation."""

import numpy as np
import pytest

from inverse_matrix import InvalidDimensionError
from inverse_matrix.naive import gauss_jordan, identity, invert_matrix, swap_rows


def test_identity():
    assert identity(3) == [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]


def test_known_inverse():
    A_inv, damped = invert_matrix([[4, 7], [2, 6]])
    assert damped == []
    np.testing.assert_allclose(A_inv, [[0.6, -0.7], [-0.2, 0.4]], atol=1e-9, rtol=0)


def test_order_one():
    A_inv, _ = invert_matrix([[5]])
    assert abs(A_inv[0][0] - 0.2) < 1e-15


def test_input_rows_untouched():
    A = [[0.0, 1.0], [1.0, 0.0]]
    A_inv, _ = invert_matrix(A)
    assert A == [[0.0, 1.0], [1.0, 0.0]]
    assert A_inv == [[0.0, 1.0], [1.0, 0.0]]


def test_singular_is_damped():
    A_inv, damped = invert_matrix([[1, 2], [2, 4]])
    assert damped == [1]
    assert all(np.isfinite(x) for row in A_inv for x in row)


def test_swap_rows():
    M = [[0.0, 1.0], [0.0, 2.0], [5.0, 3.0]]
    assert swap_rows(0, M)
    assert M == [[5.0, 3.0], [0.0, 2.0], [0.0, 1.0]]
    assert not swap_rows(1, [[1.0, 0.0], [1.0, 0.0]])


def test_gauss_jordan_in_place():
    M = [[2.0, 0.0, 1.0, 0.0], [0.0, 4.0, 0.0, 1.0]]
    assert gauss_jordan(M) == []
    assert M == [[1.0, 0.0, 0.5, 0.0], [0.0, 1.0, 0.0, 0.25]]


@pytest.mark.parametrize("bad", [[], [1.0], [1.0, 2.0], 5.0, ["ab", "cd"], [[1.0, 2.0]], [[1.0, 2.0], [3.0]]])
def test_rejects_non_square(bad):
    with pytest.raises(InvalidDimensionError):
        invert_matrix(bad)


@pytest.mark.parametrize("tol", [0.0, -1.0, float("nan")])
def test_rejects_unusable_tolerance(tol):
    with pytest.raises(ValueError, match="tolerance"):
        invert_matrix([[1.0, 2.0], [2.0, 4.0]], tol=tol)
