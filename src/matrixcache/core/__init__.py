"""
Core functionality of matrixcache.

- MatrixCache: a single matrix and its cached inverse
- cache_solve: return the cached inverse or compute and store it
"""

from ..exceptions import InvalidParametersError, MatrixCacheError, NotInvertibleError
from .matrix_cache import CacheState, MatrixCache
from .solver import cache_solve, invert

__all__ = [
    "CacheState",
    "InvalidParametersError",
    "MatrixCache",
    "MatrixCacheError",
    "NotInvertibleError",
    "cache_solve",
    "invert",
]
