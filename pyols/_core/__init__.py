"""
Core algorithms (backend-agnostic).
"""

from .qr import QRDecomposition, qr_decomposition_with_pivoting
from .lm_solver import fit_ols

__all__ = [
    "QRDecomposition",
    "qr_decomposition_with_pivoting",
    "fit_ols",
]
