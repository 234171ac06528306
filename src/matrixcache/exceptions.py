"""
Exceptions raised by the matrix cache and its inversion routine.
"""

from typing import Optional, Tuple


class MatrixCacheError(Exception):
    """Base class for matrixcache errors"""


class NotInvertibleError(MatrixCacheError, ValueError):
    """Raised when a matrix is singular, non-square or otherwise cannot be inverted"""

    def __init__(self, message: str, shape: Optional[Tuple[int, ...]] = None, rcond: Optional[float] = None):
        super().__init__(message)
        self.shape = shape
        self.rcond = rcond


class InvalidParametersError(MatrixCacheError, ValueError):
    """Raised for inversion parameters that cannot be used"""
