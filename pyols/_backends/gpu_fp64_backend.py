"""
GPU backend using PyTorch with FP64 precision.

For CUDA devices. Apple Metal has no float64, so it is not supported.
"""

import logging
import warnings
from typing import Optional

import numpy as np

from .base import GPUBackendFP64
from .._core.qr import QRDecomposition, default_rank_tol, numerical_rank
from ..exceptions import NumericalFailureError

logger = logging.getLogger(__name__)


class PyTorchBackendFP64(GPUBackendFP64):
    """
    PyTorch GPU backend with FP64 precision.

    Normal equations use Cholesky on X'X. QR is unpivoted
    (torch.linalg.qr has no column pivoting), so rank-deficient
    designs should go to the CPU backend.
    """

    def __init__(self, device: Optional[str] = None):
        """Initialize PyTorch FP64 backend."""
        self.name = "pytorch_fp64"
        self.precision = "fp64"

        try:
            import torch
            self.torch = torch
        except ImportError:
            raise ImportError(
                "PyTorch required for GPU backend. "
                "Install: pip install pyols[gpu]"
            )

        if device == 'mps':
            raise RuntimeError(
                "FP64 not supported on Apple Metal. Use backend='cpu'."
            )

        if device is None:
            if not torch.cuda.is_available():
                raise RuntimeError(
                    "No CUDA GPU available. Use backend='cpu'."
                )
            device = 'cuda'

        self.device = torch.device(device)

        if self.device.type == 'cuda':
            from .precision_detector import detect_gpu_capabilities, PrecisionSupport
            caps = detect_gpu_capabilities()
            if caps.fp64_support == PrecisionSupport.GIMPED_FP64:
                warnings.warn(
                    f"Using FP64 on {caps.gpu_name} with gimped FP64 support. "
                    f"This will be ~{int(1/caps.fp64_throughput_ratio)}x slower than FP32.",
                    UserWarning
                )

    def _to_device(self, a: np.ndarray):
        return self.torch.from_numpy(np.ascontiguousarray(a)).to(
            device=self.device, dtype=self.torch.float64
        )

    def solve_normal_equations(self, X: np.ndarray, y: np.ndarray):
        """Solve (X'X) b = X'y via Cholesky on the device."""
        torch = self.torch
        m = X.shape[1]

        X_gpu = self._to_device(X)
        y_gpu = self._to_device(y)

        gram = X_gpu.T @ X_gpu
        xty = (X_gpu.T @ y_gpu).unsqueeze(1)

        L, info = torch.linalg.cholesky_ex(gram)
        if int(info.item()) != 0:
            raise NumericalFailureError(
                f"Normal equations failed: X'X ({m}x{m}) is not positive "
                f"definite (leading minor {int(info.item())}). "
                f"Try the QR strategy (--qr) on the CPU backend.",
                strategy='normal'
            )

        # Squared diagonal ratio of L approximates 1/cond(X'X)
        diag = torch.diagonal(L)
        rcond = float((diag.min() / diag.max()) ** 2)
        if rcond < m * np.finfo(np.float64).eps:
            raise NumericalFailureError(
                f"Normal equations failed: X'X ({m}x{m}) is numerically "
                f"singular (rcond ~ {rcond:.3g}). "
                f"Try the QR strategy (--qr) on the CPU backend.",
                strategy='normal'
            )

        coef = torch.cholesky_solve(xty, L).squeeze(1).cpu().numpy()

        if not np.all(np.isfinite(coef)):
            raise NumericalFailureError(
                "Normal equations produced non-finite coefficients. "
                "Try the QR strategy (--qr).",
                strategy='normal'
            )

        return coef, m, []

    def qr_with_pivoting(self, X: np.ndarray, tol: Optional[float] = None) -> QRDecomposition:
        """QR without pivoting - identity permutation."""
        torch = self.torch
        n, m = X.shape
        if tol is None:
            tol = default_rank_tol(n, m)

        Q, R = torch.linalg.qr(self._to_device(X), mode='reduced')
        R_np = R.cpu().numpy()

        return QRDecomposition(
            Q=Q.cpu().numpy(),
            R=R_np,
            pivot=np.arange(m, dtype=np.int64),
            rank=numerical_rank(R_np, tol),
            tol=tol,
        )

    def solve_qr(self, X: np.ndarray, y: np.ndarray):
        """Solve R b = Q'y on the device."""
        torch = self.torch
        n, m = X.shape

        Q, R = torch.linalg.qr(self._to_device(X), mode='reduced')
        rank = numerical_rank(R.cpu().numpy(), default_rank_tol(n, m))
        if rank < m:
            raise NumericalFailureError(
                f"Design matrix is rank-deficient (rank={rank}, m={m}); "
                f"unpivoted GPU QR cannot solve it. Use backend='cpu'.",
                strategy='qr'
            )

        qty = (Q.T @ self._to_device(y)).unsqueeze(1)
        coef = torch.linalg.solve_triangular(R, qty, upper=True).squeeze(1).cpu().numpy()

        if not np.all(np.isfinite(coef)):
            raise NumericalFailureError(
                "QR solve produced non-finite coefficients",
                strategy='qr'
            )

        return coef, rank, []

    def get_device_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': 'gpu',
            'precision': 'fp64',
            'device': str(self.device),
            'library': f'PyTorch {self.torch.__version__}',
        }
