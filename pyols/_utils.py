"""
Utility functions.
"""

import numpy as np

from .exceptions import InvalidShapeError, ValidationError


def check_array(X, name='X', dtype=np.float64):
    """Validate matrix input."""
    X = np.asarray(X, dtype=dtype)
    if X.ndim != 2:
        raise InvalidShapeError(
            f"{name} must be 2-dimensional, got shape {X.shape}"
        )
    if not np.all(np.isfinite(X)):
        raise ValidationError(f"{name} contains NaN or Inf")
    return X


def check_vector(y, name='y', dtype=np.float64):
    """Validate vector input."""
    y = np.asarray(y, dtype=dtype)
    if y.ndim != 1:
        raise InvalidShapeError(
            f"{name} must be 1-dimensional, got shape {y.shape}"
        )
    if not np.all(np.isfinite(y)):
        raise ValidationError(f"{name} contains NaN or Inf")
    return y


def validate_shape(X, y):
    """
    Check the system is over-determined and X, y agree.

    Parameters
    ----------
    X : ndarray, shape (n, m)
        Design matrix
    y : ndarray, shape (n,)
        Response vector

    Raises
    ------
    InvalidShapeError
        If len(y) != n, m == 0 or n <= m
    """
    n, m = X.shape
    dims = dict(n_obs=n, n_coef=m, n_response=len(y))

    if len(y) != n:
        raise InvalidShapeError(
            f"Response has {len(y)} rows but design matrix has {n}",
            **dims
        )
    if m == 0:
        raise InvalidShapeError(
            "Design matrix must have m > 0 (at least one coefficient to solve for)",
            **dims
        )
    if n <= m:
        raise InvalidShapeError(
            f"Design matrix must have n > m (more rows than columns), "
            f"got n={n}, m={m}",
            **dims
        )
