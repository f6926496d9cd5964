"""
CPU backend using NumPy + SciPy.

This is the reference implementation: LAPACK for both strategies,
deterministic for a given input.
"""

import logging
import warnings
from typing import Optional

import numpy as np
from scipy.linalg import LinAlgError, LinAlgWarning, qr, solve, solve_triangular

from .base import CPUBackend
from .._core.qr import QRDecomposition, default_rank_tol, numerical_rank
from ..exceptions import NumericalFailureError

logger = logging.getLogger(__name__)

QR_HINT = "Try the QR strategy (--qr) for ill-conditioned or collinear data."


class CPUBackendFP64(CPUBackend):
    """
    CPU backend using NumPy + SciPy.

    Reference implementation. Always uses FP64 precision.
    """

    def __init__(self):
        self.name = "cpu_fp64"
        self.precision = "fp64"

    def solve_normal_equations(self, X: np.ndarray, y: np.ndarray):
        """
        Solve (X'X) b = X'y with LAPACK ?sysv (Bunch-Kaufman LDL').

        Squares the condition number of X. LAPACK's reciprocal condition
        estimate dropping below machine epsilon is treated as failure,
        not as a warning.
        """
        m = X.shape[1]
        gram = X.T @ X
        xty = X.T @ y

        with warnings.catch_warnings():
            warnings.simplefilter("error", LinAlgWarning)
            try:
                coef = solve(gram, xty, assume_a='sym', check_finite=False)
            except LinAlgError as err:
                raise NumericalFailureError(
                    f"Normal equations failed: X'X ({m}x{m}) is singular ({err}). "
                    f"{QR_HINT}",
                    strategy='normal'
                ) from err
            except LinAlgWarning as err:
                raise NumericalFailureError(
                    f"Normal equations failed: X'X ({m}x{m}) is numerically "
                    f"singular ({err}). {QR_HINT}",
                    strategy='normal'
                ) from err

        if not np.all(np.isfinite(coef)):
            raise NumericalFailureError(
                f"Normal equations produced non-finite coefficients. {QR_HINT}",
                strategy='normal'
            )

        return coef, m, []

    def qr_with_pivoting(self, X: np.ndarray, tol: Optional[float] = None) -> QRDecomposition:
        """Economic QR with column pivoting (LAPACK ?geqp3)."""
        n, m = X.shape
        if tol is None:
            tol = default_rank_tol(n, m)

        Q, R, P = qr(X, mode='economic', pivoting=True, check_finite=False)

        return QRDecomposition(
            Q=Q,
            R=R,
            pivot=P.astype(np.int64),
            rank=numerical_rank(R, tol),
            tol=tol,
        )

    def solve_qr(self, X: np.ndarray, y: np.ndarray):
        """
        Solve R b = Q'y by back-substitution, then undo the pivoting.

        When X is rank-deficient the trailing pivoted coefficients are
        set to zero (basic solution).
        """
        m = X.shape[1]
        decomp = self.qr_with_pivoting(X)
        rank = decomp.rank
        notes = []

        qty = decomp.Q.T @ y
        coef_pivoted = np.zeros(m, dtype=np.float64)
        if rank > 0:
            coef_pivoted[:rank] = solve_triangular(
                decomp.R[:rank, :rank],
                qty[:rank],
                lower=False,
                check_finite=False
            )

        if rank < m:
            dropped = sorted(int(j) for j in decomp.pivot[rank:])
            msg = (
                f"Design matrix is rank-deficient (rank={rank}, m={m}); "
                f"coefficients for columns {dropped} set to 0"
            )
            logger.warning(msg)
            notes.append(msg)

        coef = np.empty(m, dtype=np.float64)
        coef[decomp.pivot] = coef_pivoted

        if not np.all(np.isfinite(coef)):
            raise NumericalFailureError(
                "QR solve produced non-finite coefficients",
                strategy='qr'
            )

        return coef, rank, notes

    def get_device_info(self) -> dict:
        """Get backend information."""
        import scipy
        return {
            'backend': 'cpu',
            'precision': 'fp64',
            'library': f'NumPy {np.__version__}, SciPy {scipy.__version__}',
        }
