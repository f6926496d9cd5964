"""
QR decomposition with column pivoting.

Backend-agnostic interface to QR factorization.
"""

import numpy as np
from typing import Optional
from dataclasses import dataclass


@dataclass
class QRDecomposition:
    """Result of QR decomposition with pivoting."""
    Q: np.ndarray            # Orthonormal columns, shape (n, m)
    R: np.ndarray            # Upper triangular, shape (m, m)
    pivot: np.ndarray        # Column permutation (0-indexed): X[:, pivot] = Q @ R
    rank: int                # Numerical rank
    tol: float               # Relative tolerance used for the rank


def default_rank_tol(n: int, m: int, dtype=np.float64) -> float:
    """Relative tolerance on |R[i, i]| / |R[0, 0]|."""
    return max(n, m) * float(np.finfo(dtype).eps)


def numerical_rank(R: np.ndarray, tol: float) -> int:
    """Count diagonal entries of R above tol * |R[0, 0]|."""
    R_diag = np.abs(np.diag(R))
    if R_diag.size == 0 or R_diag[0] == 0:
        return 0
    return int(np.sum(R_diag > tol * R_diag[0]))


def qr_decomposition_with_pivoting(
    X: np.ndarray,
    tol: Optional[float] = None,
    backend = None,
) -> QRDecomposition:
    """
    QR decomposition with column pivoting.

    Delegates to backend-specific implementation.

    Parameters
    ----------
    X : ndarray, shape (n, m)
        Matrix to decompose
    tol : float, optional
        Relative tolerance for rank determination
    backend : Backend, optional
        Computational backend

    Returns
    -------
    result : QRDecomposition
        QR decomposition with pivoting
    """
    if backend is None:
        from .._backends import get_backend
        backend = get_backend('cpu')

    return backend.qr_with_pivoting(X, tol=tol)
