"""
Random problems for speed tests.
"""

import logging
import time
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# Problems smaller than this are echoed to the debug log
ECHO_LIMIT = 1000


def random_problem(
    m: int,
    n: int,
    seed: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build an (n x m) design matrix and length-n response.

    Entries are uniform on [-1, 1]. Dimensions are passed through
    unchecked so that bad sizes fail in the solver's shape validation
    like any other input.

    Parameters
    ----------
    m : int
        Number of columns (coefficients)
    n : int
        Number of rows (observations)
    seed : int, optional
        Seed for ``numpy.random.default_rng``

    Returns
    -------
    (X, y)
    """
    if m < 0 or n < 0:
        raise ValueError(f"dimensions must be non-negative, got m={m}, n={n}")

    start = time.perf_counter()
    rng = np.random.default_rng(seed)
    X = rng.uniform(-1.0, 1.0, size=(n, m))
    y = rng.uniform(-1.0, 1.0, size=n)
    elapsed = time.perf_counter() - start

    if n * m < ECHO_LIMIT:
        logger.debug("Here is the matrix X:\n%s", X)
        logger.debug("Here is the right hand side y:\n%s", y)
    logger.info("Init time: \t[%.6f] seconds", elapsed)

    return X, y
