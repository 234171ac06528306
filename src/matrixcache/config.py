"""
Configuration for matrix inversion.
"""

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
import yaml

from .exceptions import InvalidParametersError

logger = logging.getLogger(__name__)

SOLVE_METHODS = ("inv", "solve")

# Machine epsilon for doubles
DEFAULT_TOL = float(np.finfo(np.float64).eps)


class MatrixCacheConfig:
    """Process-wide defaults, read from the environment."""

    SOLVE_METHOD = os.environ.get("MATRIXCACHE_SOLVE_METHOD", "inv")
    LOG_LEVEL = os.environ.get("MATRIXCACHE_LOG_LEVEL", "INFO").upper()
    CHECK_FINITE = os.environ.get("MATRIXCACHE_CHECK_FINITE", "1") == "1"


@dataclass
class SolveParameters:
    """Options forwarded to the inversion routine"""

    method: str = MatrixCacheConfig.SOLVE_METHOD  # "inv" (LU) or "solve" (A x = I)
    tol: Optional[float] = DEFAULT_TOL  # Minimum reciprocal condition number; None disables the check
    check_finite: bool = MatrixCacheConfig.CHECK_FINITE

    def validate(self) -> None:
        """Check the parameters, coercing ``tol`` to float. Raises InvalidParametersError."""
        if self.method not in SOLVE_METHODS:
            raise InvalidParametersError(
                f"Unsupported inversion method: {self.method!r}. Expected one of {', '.join(SOLVE_METHODS)}"
            )
        if self.tol is not None:
            # YAML 1.1 reads "1e-10" (no dot) as a string
            if isinstance(self.tol, bool):
                raise InvalidParametersError(f"Tolerance must be a number, got {self.tol!r}")
            try:
                tol = float(self.tol)
            except (TypeError, ValueError) as e:
                raise InvalidParametersError(f"Tolerance must be a number, got {self.tol!r}") from e
            if not np.isfinite(tol) or tol < 0:
                raise InvalidParametersError(f"Tolerance must be finite and non-negative, got {self.tol!r}")
            self.tol = tol
        if not isinstance(self.check_finite, bool):
            raise InvalidParametersError(f"check_finite must be true or false, got {self.check_finite!r}")

    def save_to_yaml(self, filepath: Union[str, Path]):
        """Saves the parameters to a YAML file."""
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w") as f:
            yaml.safe_dump(asdict(self), f, sort_keys=False)
        logger.info(f"Solve parameters saved to {filepath}")

    @classmethod
    def load_from_yaml(cls, filepath: Union[str, Path]) -> "SolveParameters":
        """Loads parameters from a YAML file, ignoring keys that are not parameters."""
        filepath = Path(filepath)
        if not filepath.exists():
            logger.error(f"Parameter file not found: {filepath}")
            raise FileNotFoundError(f"Parameter file not found: {filepath}")
        with open(filepath, "r") as f:
            params_dict = yaml.safe_load(f) or {}

        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        unknown = set(params_dict) - valid_fields
        if unknown:
            logger.warning(f"Ignoring unknown solve parameters in {filepath}: {sorted(unknown)}")
        params = cls(**{k: v for k, v in params_dict.items() if k in valid_fields})
        params.validate()
        return params
