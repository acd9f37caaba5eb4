import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def well_conditioned(rng):
    """Factory for random diagonally dominant matrices of a given order."""
    def make(n):
        return rng.standard_normal((n, n)) + n * np.eye(n)
    return make
