"""
Shared fixtures.
"""

import numpy as np
import pytest


@pytest.fixture
def write_text(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


@pytest.fixture
def write_csv(tmp_path):
    """Write a 2-D array as comma-separated rows at full precision."""
    def _write(name, array):
        path = tmp_path / name
        array = np.atleast_2d(np.asarray(array, dtype=np.float64))
        np.savetxt(path, array, fmt='%.17g', delimiter=',')
        return path
    return _write


@pytest.fixture
def gaussian_problem():
    """Well-conditioned full-rank problem: n=500, m=5."""
    np.random.seed(42)
    n, m = 500, 5
    X = np.random.randn(n, m)
    beta_true = np.array([1.0, 2.0, -1.5, 0.25, 3.0])
    return X, beta_true
