"""
Least-squares solver.

Delegates to backend for actual computation.
"""

import numpy as np
from typing import Union

from ..config import Strategy


def fit_ols(
    X: np.ndarray,
    y: np.ndarray,
    strategy: Union[str, Strategy] = Strategy.NORMAL,
    backend = None,
):
    """
    Solve ordinary least squares via backend.

    This is just a thin wrapper - backends do all the work.
    Shape validation is the caller's job (see ``pyols.ols``).

    Parameters
    ----------
    X : ndarray, shape (n, m)
        Design matrix (used as given, no intercept added)
    y : ndarray, shape (n,)
        Response vector
    strategy : str or Strategy
        'normal' (default) or 'qr'
    backend : Backend, optional
        Computational backend

    Returns
    -------
    result : OLSResult (from backend)
        Coefficients and solve metadata
    """
    if backend is None:
        from .._backends import get_backend
        backend = get_backend('cpu')

    return backend.fit_ols(X, y, Strategy.parse(strategy))
