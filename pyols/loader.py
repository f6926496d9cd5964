"""
Tabular loader: comma-separated numeric text to dense float64 arrays.

Every line is one record and every field must be a finite number.
The first line fixes the column count; any other count is an error,
never a silent truncation or padding.
"""

import logging
import time
from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_matrix(path: PathLike, name: str = 'matrix') -> np.ndarray:
    """
    Load a comma-separated file into a dense matrix.

    Parameters
    ----------
    path : str or Path
        Text file with one comma-separated numeric record per line
    name : str
        What the file holds, used in log and error messages

    Returns
    -------
    ndarray, shape (n_lines, n_fields_on_line_1)
        float64 matrix

    Raises
    ------
    MalformedInputError
        If the file cannot be read, is empty, has ragged rows or
        non-numeric / non-finite fields
    """
    path = Path(path)
    start = time.perf_counter()

    try:
        df = pd.read_csv(
            path,
            header=None,
            dtype=np.float64,
            skip_blank_lines=False,
            float_precision='round_trip',
        )
    except pd.errors.EmptyDataError as err:
        raise MalformedInputError(
            f"{name} file {path} is empty", path=str(path)
        ) from err
    except pd.errors.ParserError as err:
        # Raised by the tokenizer when a row has more fields than line 1
        raise MalformedInputError(
            f"{name} file {path} has inconsistent column counts: {err}",
            path=str(path)
        ) from err
    except ValueError as err:
        raise MalformedInputError(
            f"{name} file {path} contains a non-numeric field: {err}",
            path=str(path)
        ) from err
    except OSError as err:
        raise MalformedInputError(
            f"cannot open {name} file {path}: {err}", path=str(path)
        ) from err

    data = df.to_numpy(dtype=np.float64)
    n_rows, n_cols = data.shape

    # Short rows and blank lines come back as NaN; so do nan/NA literals
    bad_rows = np.flatnonzero(~np.all(np.isfinite(data), axis=1))
    if bad_rows.size:
        row = int(bad_rows[0])
        n_missing = int(np.sum(np.isnan(data[row])))
        line = row + 1
        if n_missing:
            detail = (
                f"expected {n_cols} numeric fields on every line, "
                f"line {line} has {n_cols - n_missing}"
            )
        else:
            detail = f"line {line} contains an infinite value"
        raise MalformedInputError(
            f"{name} file {path}: {detail}", path=str(path), line=line
        )

    elapsed = time.perf_counter() - start
    logger.info("%s file %s has %d columns", name, path, n_cols)
    logger.info("%s file %s has %d rows", name, path, n_rows)
    logger.info("Load time: \t[%.6f] seconds", elapsed)

    return data


def load_response(path: PathLike) -> np.ndarray:
    """
    Load a response vector.

    Only the first column is used; extra columns are ignored so that
    multi-column observation files can be passed as they are.

    Returns
    -------
    ndarray, shape (n_lines,)
    """
    data = load_matrix(path, name='response')
    if data.shape[1] > 1:
        logger.debug(
            "response file %s has %d columns, using the first",
            path, data.shape[1]
        )
    return np.ascontiguousarray(data[:, 0])
