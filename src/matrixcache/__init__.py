"""
matrixcache: memoized matrix inversion.
"""

from .config import MatrixCacheConfig, SolveParameters
from .core import (
    CacheState,
    InvalidParametersError,
    MatrixCache,
    MatrixCacheError,
    NotInvertibleError,
    cache_solve,
    invert,
)

__version__ = "0.1.0"

__all__ = [
    "CacheState",
    "InvalidParametersError",
    "MatrixCache",
    "MatrixCacheConfig",
    "MatrixCacheError",
    "NotInvertibleError",
    "SolveParameters",
    "cache_solve",
    "invert",
]
