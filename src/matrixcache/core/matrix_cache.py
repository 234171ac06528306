"""
A cache holding one matrix together with its lazily computed inverse.
"""

import copy
import logging
import threading
from enum import Enum, auto
from typing import Any, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


class CacheState(Enum):
    """State of the inverse slot of a MatrixCache"""

    INVALIDATED = auto()  # No inverse stored for the current matrix
    CACHED = auto()  # Inverse stored for the current matrix


def _placeholder_matrix() -> np.ndarray:
    mat = np.full((1, 1), np.nan)
    mat.setflags(write=False)
    return mat


def _owned_copy(value: Any) -> Any:
    """Copy ``value`` so the cache holds the only reference; array data is made read-only."""
    if isinstance(value, pd.DataFrame):
        data = value.to_numpy(copy=True)
        data.setflags(write=False)
        return pd.DataFrame(data, index=value.index.copy(), columns=value.columns.copy(), copy=False)
    if isinstance(value, np.ndarray):
        data = np.array(value, copy=True)
        data.setflags(write=False)
        return data
    return copy.deepcopy(value)


class MatrixCache:
    """
    Holds a single matrix and, once computed, its inverse.

    Replacing the matrix always clears the stored inverse, so the inverse
    slot never refers to a matrix other than the current one. Both slots are
    guarded by a re-entrant lock; callers that read and then write (such as
    ``cache_solve``) hold ``lock`` for the whole sequence.
    """

    def __init__(self, mat: Any = None):
        """
        Args:
            mat: Initial matrix. Defaults to a 1x1 matrix holding NaN, meaning
                "no matrix yet".
        """
        self._lock = threading.RLock()
        self._matrix = _placeholder_matrix() if mat is None else _owned_copy(mat)
        self._inverse: Optional[Any] = None

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def state(self) -> CacheState:
        with self._lock:
            return CacheState.INVALIDATED if self._inverse is None else CacheState.CACHED

    def set_matrix(self, mat: Any) -> None:
        """Replace the stored matrix and invalidate the cached inverse"""
        with self._lock:
            self._matrix = _owned_copy(mat)
            self._inverse = None
        logger.debug(f"Matrix replaced with shape {np.shape(mat)}; cached inverse invalidated")

    def get_matrix(self) -> Any:
        """Return the stored matrix. Array data is read-only; copy it before modifying."""
        with self._lock:
            return self._matrix

    def set_inverse(self, inv: Any) -> None:
        """Store ``inv`` as the inverse of the current matrix. The value is copied, not verified."""
        with self._lock:
            self._inverse = None if inv is None else _owned_copy(inv)

    def get_inverse(self) -> Optional[Any]:
        """Return the cached inverse, or None if it has not been set since the last set_matrix"""
        with self._lock:
            return self._inverse

    def __repr__(self) -> str:
        with self._lock:
            return f"{type(self).__name__}(shape={np.shape(self._matrix)}, state={self.state.name})"
