"""
Backend selection and management.

Provides a unified interface for the CPU (NumPy/SciPy) and NVIDIA GPU
(PyTorch, FP64) backends.
"""

from .base import BackendBase, OLSResult
from .precision_detector import detect_gpu_capabilities, GPUCapabilities
from .cpu_fp64_backend import CPUBackendFP64

# PyTorch is an optional dependency (pip install pyols[gpu])
try:
    import torch  # noqa: F401
    from .gpu_fp64_backend import PyTorchBackendFP64
    PYTORCH_FP64_AVAILABLE = True
except ImportError:
    PYTORCH_FP64_AVAILABLE = False


def get_backend(backend: str = 'auto') -> BackendBase:
    """
    Get computational backend.

    Parameters
    ----------
    backend : str
        Backend selection:
        - 'auto': CPU (deterministic LAPACK reference)
        - 'cpu': CPU with NumPy/SciPy (FP64)
        - 'gpu' / 'pytorch': PyTorch on CUDA (FP64)

    Returns
    -------
    BackendBase
        Backend instance

    Examples
    --------
    >>> backend = get_backend('cpu')
    >>> backend.name
    'cpu_fp64'
    """
    if backend in ('auto', 'cpu'):
        return CPUBackendFP64()

    elif backend in ('gpu', 'pytorch'):
        if not PYTORCH_FP64_AVAILABLE:
            raise RuntimeError(
                "PyTorch backend unavailable.\n"
                "Install: pip install pyols[gpu]"
            )
        caps = detect_gpu_capabilities()
        if not caps.can_run_fp64:
            raise RuntimeError(
                f"No FP64-capable GPU detected ({caps.gpu_name}).\n"
                f"Use backend='cpu'"
            )
        return PyTorchBackendFP64()

    else:
        raise ValueError(
            f"Unknown backend: '{backend}'\n"
            f"Valid options: 'auto', 'cpu', 'gpu', 'pytorch'"
        )


def list_available_backends() -> list:
    """List names of backends usable on this host."""
    backends = ['cpu']
    if PYTORCH_FP64_AVAILABLE and detect_gpu_capabilities().can_run_fp64:
        backends.append('pytorch')
    return backends


def print_backend_info():
    """Print detailed backend information (diagnostic)."""
    caps = detect_gpu_capabilities()

    print("PyOLS Backend Status")
    print("=" * 50)
    print("\nAvailable Backends:")
    print("  CPU (FP64):          ✓ - normal equations (LDL'), pivoted QR")
    print(f"  PyTorch CUDA (FP64): {'✓' if 'pytorch' in list_available_backends() else '✗'}"
          f" - normal equations (Cholesky), unpivoted QR")

    print("\nHardware Detection:")
    if caps.has_gpu:
        print(f"  GPU Type: {caps.gpu_type}")
        print(f"  GPU Name: {caps.gpu_name}")
        print(f"  FP64 Support: {caps.fp64_support.value}")
    else:
        print("  No GPU detected")


__all__ = [
    'get_backend',
    'list_available_backends',
    'print_backend_info',
    'BackendBase',
    'OLSResult',
    'GPUCapabilities',
    'detect_gpu_capabilities',
    'PYTORCH_FP64_AVAILABLE',
]
