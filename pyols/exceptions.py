"""
Exception hierarchy for PyOLS.

All exceptions inherit from PyOLSError so callers can catch any
library-specific failure in one place. Every failure is terminal for
the run: nothing here is retried or recovered from.
"""

from typing import Optional


class PyOLSError(Exception):
    """Base exception for all PyOLS errors."""
    pass


class UsageError(PyOLSError):
    """Command-line input is malformed or incomplete."""
    pass


class ValidationError(PyOLSError):
    """
    Input data was rejected before any solve was attempted.
    """
    pass


class MalformedInputError(ValidationError):
    """
    A delimited input file could not be turned into a dense matrix.

    Raised when the file cannot be opened, rows are ragged, or a field
    is not a finite number.

    Attributes
    ----------
    path : str or None
        File that failed to load
    line : int or None
        1-based line number of the offending record, if known
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None
    ):
        super().__init__(message)
        self.path = path
        self.line = line


class InvalidShapeError(ValidationError):
    """
    Data parsed fine but the system has no unique least-squares answer.

    Attributes
    ----------
    n_obs : int or None
        Rows of the design matrix
    n_coef : int or None
        Columns of the design matrix
    n_response : int or None
        Length of the response vector
    """

    def __init__(
        self,
        message: str,
        n_obs: Optional[int] = None,
        n_coef: Optional[int] = None,
        n_response: Optional[int] = None
    ):
        super().__init__(message)
        self.n_obs = n_obs
        self.n_coef = n_coef
        self.n_response = n_response


class NumericalFailureError(PyOLSError):
    """
    Factorization could not produce a finite coefficient vector.

    Attributes
    ----------
    strategy : str or None
        Strategy that failed ('normal' or 'qr')
    """

    def __init__(self, message: str, strategy: Optional[str] = None):
        super().__init__(message)
        self.strategy = strategy


__all__ = [
    "PyOLSError",
    "UsageError",
    "ValidationError",
    "MalformedInputError",
    "InvalidShapeError",
    "NumericalFailureError",
]
