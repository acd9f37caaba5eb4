"""Tests for the PyTorch Gauss-Jordan inverter (skipped without torch)."""

import logging

import numpy as np
import pytest

torch = pytest.importorskip("torch")

from inverse_matrix import InvalidDimensionError, inv
from inverse_matrix.torch_backend import GaussJordanTorch


@pytest.fixture
def gj():
    return GaussJordanTorch(device="cpu")


def test_known_inverse(gj):
    result = gj.invert([[4.0, 7.0], [2.0, 6.0]])
    assert isinstance(result.inverse, torch.Tensor)
    assert result.inverse.dtype == torch.float64
    assert not result.degenerate
    expected = torch.tensor([[0.6, -0.7], [-0.2, 0.4]], dtype=torch.float64)
    assert torch.allclose(result.inverse, expected, atol=1e-9, rtol=0)


def test_identity(gj):
    result = gj.invert(torch.eye(4, dtype=torch.float64))
    assert torch.equal(result.inverse, torch.eye(4, dtype=torch.float64))


@pytest.mark.parametrize("n", [1, 3, 6, 10])
def test_matches_numpy_path(gj, well_conditioned, n):
    A = well_conditioned(n)
    result = gj.invert(torch.from_numpy(A))
    np.testing.assert_allclose(result.inverse.numpy(), inv(A), rtol=1e-12, atol=1e-12)


def test_row_swap(gj):
    result = gj.invert([[0.0, 1.0], [1.0, 0.0]])
    assert torch.equal(result.inverse, torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=torch.float64))


def test_singular(gj):
    result = gj.invert([[1.0, 2.0], [2.0, 4.0]])
    assert result.damped_pivots == (1,)
    assert torch.isfinite(result.inverse).all()
    np.testing.assert_allclose(result.inverse.numpy(), inv([[1.0, 2.0], [2.0, 4.0]]), rtol=1e-12)


def test_input_tensor_not_mutated(gj):
    A = torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=torch.float64)
    before = A.clone()
    gj.invert(A)
    assert torch.equal(A, before)


def test_invert_direct(gj, well_conditioned):
    A = well_conditioned(5)
    np.testing.assert_allclose(gj.invert_direct(A).numpy(), np.linalg.inv(A), rtol=1e-9)


@pytest.mark.parametrize("bad", [torch.zeros(0, 0), torch.zeros(2, 3), torch.zeros(4), [[1.0, 2.0], [3.0]]])
def test_rejects_bad_shapes(gj, bad):
    with pytest.raises(InvalidDimensionError):
        gj.invert(bad)


def test_cuda_fallback_warns(monkeypatch, caplog):
    monkeypatch.setattr(torch.cuda, "is_available", lambda: False)
    caplog.set_level(logging.WARNING, logger="inverse_matrix")
    gj = GaussJordanTorch(device="cuda")
    assert gj.device.type == "cpu"
    assert any("falling back to CPU" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("tol", [0.0, -1.0, float("nan")])
def test_rejects_unusable_tolerance(tol):
    with pytest.raises(ValueError, match="tolerance"):
        GaussJordanTorch(device="cpu", tol=tol)
