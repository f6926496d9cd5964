"""
PyOLS: ordinary least squares coefficients via normal equations or QR.
"""

__version__ = "1.0.0"

# Import main user-facing API
from .ols import ols, OLS
from .config import Strategy, OutputFormat, RunConfig
from .loader import load_matrix, load_response
from .writer import format_coefficients, write_coefficients
from .exceptions import (
    PyOLSError,
    UsageError,
    ValidationError,
    MalformedInputError,
    InvalidShapeError,
    NumericalFailureError,
)

# Import backend utilities (for advanced users)
from ._backends import get_backend, list_available_backends

__all__ = [
    'ols',
    'OLS',
    'Strategy',
    'OutputFormat',
    'RunConfig',
    'load_matrix',
    'load_response',
    'format_coefficients',
    'write_coefficients',
    'PyOLSError',
    'UsageError',
    'ValidationError',
    'MalformedInputError',
    'InvalidShapeError',
    'NumericalFailureError',
    'get_backend',
    'list_available_backends',
]
