"""
General utility functions.
"""

import datetime
import importlib
import importlib.util
import logging
import numpy as np
from types import ModuleType
from typing import Any, Dict, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

# Largest difference (in seconds) shown in each unit
TIME_UNITS = (
    (60, 'secs', 1),
    (3600, 'mins', 60),
    (86400, 'hours', 3600),
)


def _identical(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return type(a) is type(b) and np.array_equal(a, b)
    return type(a) is type(b) and a == b


def compare_list(a: Sequence[Any], b: Sequence[Any]) -> List[bool]:
    """
    Compare two sequences element by element.

    Args:
        a: First sequence
        b: Second sequence

    Returns:
        List of booleans, True where the elements are identical
    """
    if len(a) != len(b):
        raise ValueError("a and b must be the same length")

    return [_identical(x, y) for x, y in zip(a, b)]


def binary_flip(x: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """
    Turn 1s into 0s and 0s into 1s.

    Args:
        x: Binary values

    Returns:
        Array of flipped values
    """
    return np.abs(np.asarray(x, dtype=float) - 1)


def build_formula(lhs: Union[str, Sequence[str]], rhs: Union[str, Sequence[str]]) -> str:
    """
    Build a model formula from response and predictor names.

    Args:
        lhs: Response name(s)
        rhs: Predictor name(s)

    Returns:
        Formula string such as 'y + z ~ w + x'
    """
    lhs = [lhs] if isinstance(lhs, str) else list(lhs)
    rhs = [rhs] if isinstance(rhs, str) else list(rhs)
    return f"{' + '.join(lhs)} ~ {' + '.join(rhs)}"


def time_single(label: str = 'Time difference',
                start_time: Optional[datetime.datetime] = None,
                end_time: Optional[datetime.datetime] = None,
                sep: str = ':') -> str:
    """
    Describe the time elapsed between two moments.

    Args:
        label: Text describing what was timed
        start_time: Start of the period
        end_time: End of the period (defaults to now)
        sep: Separator between the label and the difference

    Returns:
        String like 'Time difference : 2.0012 secs'
    """
    if end_time is None:
        end_time = datetime.datetime.now()
    if not isinstance(start_time, datetime.datetime):
        raise TypeError(f"start_time must be a datetime, got {type(start_time).__name__}")
    if not isinstance(end_time, datetime.datetime):
        raise TypeError(f"end_time must be a datetime, got {type(end_time).__name__}")

    seconds = (end_time - start_time).total_seconds()
    units, divisor = 'days', 86400
    for limit, name, size in TIME_UNITS:
        if abs(seconds) < limit:
            units, divisor = name, size
            break

    return f"{label} {sep} {seconds / divisor:.7g} {units}"


def load_packages(packages: Union[str, Sequence[str]]) -> Dict[str, ModuleType]:
    """
    Import a list of packages, failing if any of them is missing.

    Args:
        packages: Package names

    Returns:
        Dict from package name to the imported module
    """
    if isinstance(packages, str):
        packages = [packages]
    if (not isinstance(packages, (list, tuple))
            or not all(isinstance(package, str) for package in packages)):
        raise TypeError("packages is not a list of strings")

    missing = [package for package in packages if importlib.util.find_spec(package) is None]
    if missing:
        raise ImportError(
            f"The following packages are not installed: {{{', '.join(missing)}}}"
        )

    modules = {package: importlib.import_module(package) for package in packages}
    logger.info(f"The following packages were loaded: {{{', '.join(packages)}}}")
    return modules
