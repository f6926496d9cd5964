"""
Ordinary least squares: the user-facing API.

Validates the system, runs one solve on a backend, and hands back the
coefficients. Nothing else: no residuals, no fit statistics.
"""

import logging
from typing import Union

import numpy as np

from ._backends import BackendBase, get_backend
from ._core import fit_ols
from ._utils import check_array, check_vector, validate_shape
from .config import Strategy

logger = logging.getLogger(__name__)


class OLS:
    """
    Least-squares coefficients for X b ~ y.

    The solve happens at construction time: a successfully built OLS is
    always in the solved state and ``coef`` never changes afterwards.

    Examples
    --------
    >>> import numpy as np
    >>> from pyols import ols
    >>>
    >>> X = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    >>> y = np.array([1.0, 2.0, 3.0])
    >>>
    >>> model = ols(X, y)                  # normal equations
    >>> model.coef                         # ~[1, 2]
    >>> ols(X, y, strategy='qr').coef      # pivoted QR, same answer
    """

    def __init__(
        self,
        X,
        y,
        strategy: Union[str, Strategy] = Strategy.NORMAL,
        backend: Union[str, BackendBase] = 'auto',
    ):
        """
        Validate inputs and solve.

        Parameters
        ----------
        X : array-like, shape (n, m)
            Design matrix, used as given (no intercept column added)
        y : array-like, shape (n,)
            Response vector
        strategy : str or Strategy
            'normal' (default): normal equations, fastest
            'qr': pivoted QR, for ill-conditioned or collinear X
        backend : str or BackendBase
            'auto', 'cpu', 'gpu', or a backend instance

        Raises
        ------
        InvalidShapeError
            If n <= m, m == 0 or len(y) != n
        NumericalFailureError
            If the factorization cannot produce finite coefficients
        """
        self.strategy = Strategy.parse(strategy)

        X = check_array(X, 'X')
        y = check_vector(y, 'y')
        validate_shape(X, y)

        # Read-only handoff to the backend
        X = X.view()
        X.setflags(write=False)
        y = y.view()
        y.setflags(write=False)

        self.n_obs, self.n_coef = X.shape
        logger.info(
            "solving for %d coefficients from %d observations", self.n_coef, self.n_obs
        )

        if isinstance(backend, BackendBase):
            self.backend = backend
        else:
            self.backend = get_backend(backend)

        self._result = fit_ols(X, y, strategy=self.strategy, backend=self.backend)

    @property
    def coef(self) -> np.ndarray:
        """Coefficient vector (read-only), shape (m,)."""
        return self._result.coef

    @property
    def rank(self) -> int:
        """Numerical rank used by the solve."""
        return self._result.rank

    @property
    def timing(self) -> dict:
        """Seconds spent per solve phase."""
        return dict(self._result.timing)

    @property
    def warnings(self) -> tuple:
        """Non-fatal notes from the solve (e.g. rank deficiency)."""
        return self._result.warnings

    def __repr__(self):
        return (
            f"OLS(n={self.n_obs}, m={self.n_coef}, "
            f"strategy='{self.strategy.value}', backend='{self.backend.name}')"
        )


def ols(X, y, strategy: Union[str, Strategy] = Strategy.NORMAL, **kwargs) -> OLS:
    """
    Solve ordinary least squares (convenience function).

    Parameters
    ----------
    X : array-like, shape (n, m)
        Design matrix
    y : array-like, shape (n,)
        Response vector
    strategy : str or Strategy
        'normal' or 'qr'
    **kwargs
        Additional arguments passed to OLS

    Returns
    -------
    OLS
        Solved model; coefficients in ``.coef``
    """
    return OLS(X, y, strategy=strategy, **kwargs)
