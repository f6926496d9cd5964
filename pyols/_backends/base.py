"""
Abstract base classes for backends.

Defines the interface all backends must implement.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Tuple

import numpy as np

from ..config import Strategy
from .._timing import Timer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OLSResult:
    """Coefficients from one least-squares solve."""
    coef: np.ndarray
    strategy: Strategy
    rank: int
    backend_name: str
    timing: Dict[str, float] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()


class BackendBase(ABC):
    """Abstract base class for all backends."""

    name = "base"
    precision = "fp64"

    def fit_ols(self, X: np.ndarray, y: np.ndarray, strategy: Strategy) -> OLSResult:
        """
        Solve min ||X b - y|| with the requested strategy.

        X and y must already have passed shape validation. The strategy
        set is closed, so dispatch is a plain branch on the tag.

        Parameters
        ----------
        X : ndarray, shape (n, m)
            Design matrix
        y : ndarray, shape (n,)
            Response vector
        strategy : Strategy
            NORMAL or QR

        Returns
        -------
        OLSResult
            Read-only coefficients plus rank and timings
        """
        timer = Timer(sync_cuda=self.name.startswith("pytorch"))
        timer.start()

        if strategy is Strategy.NORMAL:
            with timer.section('normal_equations'):
                coef, rank, notes = self.solve_normal_equations(X, y)
        elif strategy is Strategy.QR:
            with timer.section('qr'):
                coef, rank, notes = self.solve_qr(X, y)
        else:
            raise ValueError(f"Unknown strategy: {strategy!r}")

        timer.stop()
        timing = timer.result()
        logger.info(
            "%s solve on %s: %.6f seconds",
            strategy.value, self.name, timing['total_seconds']
        )

        coef = np.array(coef, dtype=np.float64)
        coef.setflags(write=False)
        return OLSResult(
            coef=coef,
            strategy=strategy,
            rank=rank,
            backend_name=self.name,
            timing=timing,
            warnings=tuple(notes),
        )

    @abstractmethod
    def solve_normal_equations(self, X: np.ndarray, y: np.ndarray):
        """
        Solve (X'X) b = X'y.

        Returns
        -------
        (coef, rank, warnings)

        Raises
        ------
        NumericalFailureError
            If X'X is singular or the solution is not finite
        """
        pass

    @abstractmethod
    def solve_qr(self, X: np.ndarray, y: np.ndarray):
        """
        Solve R b = Q'y from a QR factorization of X.

        Returns
        -------
        (coef, rank, warnings)
        """
        pass

    @abstractmethod
    def qr_with_pivoting(self, X: np.ndarray, tol=None):
        """QR factorization of X (returns QRDecomposition)."""
        pass

    @abstractmethod
    def get_device_info(self) -> dict:
        """Get backend information."""
        pass


class CPUBackend(BackendBase):
    """CPU backend base class (always FP64)."""
    pass


class GPUBackendFP64(BackendBase):
    """GPU backend base class for FP64."""
    pass
