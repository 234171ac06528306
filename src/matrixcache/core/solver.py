"""
Matrix inversion and the compute-or-fetch accessor over a MatrixCache.
"""

import logging
from typing import Any, Optional

import numpy as np
import pandas as pd
import scipy.linalg

from ..config import SolveParameters
from ..exceptions import NotInvertibleError
from .matrix_cache import MatrixCache

logger = logging.getLogger(__name__)


def invert(mat: Any, parameters: Optional[SolveParameters] = None) -> Any:
    """
    Compute the inverse of a square matrix.

    Args:
        mat: Square two-dimensional array-like. A pandas DataFrame gives back a
            DataFrame labelled with the input's columns as index and the input's
            index as columns.
        parameters: Inversion options. Defaults to SolveParameters().

    Returns:
        The inverse, as a float ndarray (or DataFrame for DataFrame input)

    Raises:
        NotInvertibleError: If the matrix is empty, not square, singular,
            contains non-finite values or its reciprocal condition number is
            below ``parameters.tol``.
    """
    parameters = parameters or SolveParameters()
    parameters.validate()

    a = np.asarray(mat)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        logger.warning(f"Cannot invert matrix of shape {a.shape}")
        raise NotInvertibleError(f"Matrix must be square and two-dimensional, got shape {a.shape}", shape=a.shape)
    if a.size == 0:
        raise NotInvertibleError("Cannot invert an empty matrix", shape=a.shape)

    try:
        if parameters.method == "solve":
            inv = scipy.linalg.solve(a, np.eye(a.shape[0], dtype=a.dtype), check_finite=parameters.check_finite)
        else:
            inv = scipy.linalg.inv(a, check_finite=parameters.check_finite)
    except (scipy.linalg.LinAlgError, ValueError) as e:
        logger.warning(f"Inversion of {a.shape} matrix failed: {e}")
        raise NotInvertibleError(f"Matrix is not invertible: {e}", shape=a.shape) from e

    if not np.all(np.isfinite(inv)):
        logger.warning(f"Inversion of {a.shape} matrix produced non-finite values")
        raise NotInvertibleError("Matrix is not invertible: result contains non-finite values", shape=a.shape)

    if parameters.tol is not None:
        rcond = 1.0 / (np.linalg.norm(a, 1) * np.linalg.norm(inv, 1))
        if rcond < parameters.tol:
            logger.warning(f"Matrix of shape {a.shape} is computationally singular (rcond={rcond:.3e})")
            raise NotInvertibleError(
                f"System is computationally singular: reciprocal condition number = {rcond:g}",
                shape=a.shape,
                rcond=rcond,
            )

    if isinstance(mat, pd.DataFrame):
        return pd.DataFrame(inv, index=mat.columns, columns=mat.index)
    return inv


def cache_solve(cache: MatrixCache, parameters: Optional[SolveParameters] = None) -> Any:
    """
    Return the inverse of the matrix held by ``cache``, computing it at most once.

    A cached inverse is returned as-is (the same read-only object). Otherwise
    the matrix is inverted with ``parameters``, stored back into the cache and
    the stored copy is returned.
    A failed inversion stores nothing and propagates NotInvertibleError.
    """
    with cache.lock:
        inv = cache.get_inverse()
        if inv is not None:
            logger.info("getting cached data")
            return inv

        mat = cache.get_matrix()
        logger.debug(f"No cached inverse; computing inverse of {np.shape(mat)} matrix")
        inv = invert(mat, parameters)
        cache.set_inverse(inv)
        return cache.get_inverse()
