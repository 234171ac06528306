"""
Command line interface: invert a matrix through a MatrixCache.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .config import SOLVE_METHODS, MatrixCacheConfig, SolveParameters
from .core import MatrixCache, cache_solve
from .exceptions import InvalidParametersError, NotInvertibleError

logger = logging.getLogger(__name__)


def load_matrix(source: str) -> np.ndarray:
    """
    Load a matrix from a file path or a JSON nested list.

    Args:
        source: Path to a .npy, .json, .csv or whitespace-delimited text file,
            or an inline JSON string such as "[[4, 7], [2, 6]]"

    Returns:
        The matrix as a float ndarray
    """
    if source.lstrip().startswith("["):
        return np.array(json.loads(source), dtype=float)

    path = Path(source)
    if path.is_file():
        logger.debug(f"Loading matrix from {path}")
        if path.suffix == ".npy":
            return np.load(path)
        if path.suffix == ".json":
            with open(path, "r") as f:
                return np.array(json.load(f), dtype=float)
        if path.suffix == ".csv":
            return np.loadtxt(path, delimiter=",", ndmin=2)
        return np.loadtxt(path, ndmin=2)

    return np.array(json.loads(source), dtype=float)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrixcache",
        description="Invert a matrix through a MatrixCache",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("matrix", help="JSON nested list, or path to a .npy/.json/.csv/.txt file")

    solve_group = parser.add_argument_group("Inversion Options")
    solve_group.add_argument("--params", type=str, help="YAML file with solve parameters")
    solve_group.add_argument("--method", choices=SOLVE_METHODS, help="Inversion method")
    solve_group.add_argument("--tol", type=float, help="Minimum reciprocal condition number")
    solve_group.add_argument("--no-check-finite", action="store_true", help="Skip the NaN/inf input check")

    run_group = parser.add_argument_group("Run Options")
    run_group.add_argument("--repeat", type=int, default=1, help="Number of times to request the inverse")
    run_group.add_argument("--log-level", default=MatrixCacheConfig.LOG_LEVEL, help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        parameters = SolveParameters.load_from_yaml(args.params) if args.params else SolveParameters()
        if args.method:
            parameters.method = args.method
        if args.tol is not None:
            parameters.tol = args.tol
        if args.no_check_finite:
            parameters.check_finite = False
        parameters.validate()
        matrix = load_matrix(args.matrix)
    except (OSError, InvalidParametersError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        return 1

    cache = MatrixCache(matrix)
    try:
        for _ in range(max(1, args.repeat)):
            inverse = cache_solve(cache, parameters)
    except NotInvertibleError as e:
        logger.error(str(e))
        return 2

    print(np.array2string(np.asarray(inverse)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
