"""
Coefficient writer.

Formatting is always taken from an explicit OutputFormat; nothing here
depends on process-wide print settings.
"""

import io
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

import numpy as np

from .config import OutputFormat

logger = logging.getLogger(__name__)


def _as_column(beta) -> np.ndarray:
    beta = np.asarray(beta, dtype=np.float64)
    if beta.ndim != 1:
        raise ValueError(f"coefficients must be 1-dimensional, got shape {beta.shape}")
    return beta.reshape(-1, 1)


def _savetxt(stream: TextIO, beta, fmt: OutputFormat) -> None:
    np.savetxt(
        stream,
        _as_column(beta),
        fmt=fmt.fmt,
        delimiter=fmt.delimiter,
        newline=fmt.newline,
    )


def format_coefficients(beta, fmt: Optional[OutputFormat] = None) -> str:
    """
    Render coefficients one per line.

    Parameters
    ----------
    beta : array-like, shape (m,)
        Coefficient vector
    fmt : OutputFormat, optional
        Defaults to 17 significant digits, '%g' notation

    Returns
    -------
    str
        m lines, each terminated by ``fmt.newline``
    """
    fmt = fmt or OutputFormat()
    buf = io.StringIO()
    _savetxt(buf, beta, fmt)
    return buf.getvalue()


def write_coefficients(
    beta,
    destination: Union[None, str, Path, TextIO] = None,
    fmt: Optional[OutputFormat] = None,
) -> None:
    """
    Write coefficients to stdout, a file path, or an open text stream.

    Parameters
    ----------
    beta : array-like, shape (m,)
        Coefficient vector
    destination : None, str, Path or text stream
        None writes to ``sys.stdout``; a path is created or truncated
    fmt : OutputFormat, optional
        Output formatting

    Raises
    ------
    OSError
        If the output file cannot be opened or written
    """
    fmt = fmt or OutputFormat()

    if destination is None:
        _savetxt(sys.stdout, beta, fmt)
        sys.stdout.flush()
    elif isinstance(destination, (str, Path)):
        with open(destination, 'w', encoding='utf-8', newline='') as f:
            _savetxt(f, beta, fmt)
        logger.info("wrote %d coefficients to %s", len(beta), destination)
    else:
        _savetxt(destination, beta, fmt)
