"""
Coordinate conversion and interval mapping.
"""

import numpy as np
import pandas as pd
from typing import Sequence, Union

ArrayLike = Union[float, Sequence[float], np.ndarray, pd.Series]


def pol2cart(r: ArrayLike, theta: ArrayLike, degrees: bool = False) -> pd.DataFrame:
    """
    Convert polar coordinates to cartesian coordinates.

    Args:
        r: Radius
        theta: Angle, in radians unless degrees is True
        degrees: Whether theta is given in degrees

    Returns:
        DataFrame with columns x, y, r and theta (theta in radians)
    """
    r = np.atleast_1d(np.asarray(r, dtype=float))
    theta = np.atleast_1d(np.asarray(theta, dtype=float))

    if degrees:
        theta = np.deg2rad(theta)

    return pd.DataFrame({
        'x': r * np.cos(theta),
        'y': r * np.sin(theta),
        'r': r,
        'theta': theta,
    })


def cart2pol(x: ArrayLike, y: ArrayLike, degrees: bool = False) -> pd.DataFrame:
    """
    Convert cartesian coordinates to polar coordinates.

    Args:
        x: x coordinate
        y: y coordinate
        degrees: Whether to return theta in degrees

    Returns:
        DataFrame with columns r, theta, x and y; theta lies in (-pi, pi]
    """
    x = np.atleast_1d(np.asarray(x, dtype=float))
    y = np.atleast_1d(np.asarray(y, dtype=float))

    theta = np.arctan2(y, x)
    if degrees:
        theta = np.rad2deg(theta)

    return pd.DataFrame({
        'r': np.hypot(x, y),
        'theta': theta,
        'x': x,
        'y': y,
    })


def map_to_interval(nums: ArrayLike, start: float = 1, stop: float = 10, skipna: bool = True) -> np.ndarray:
    """
    Linearly map numbers onto the interval [start, stop].

    formula: start + (x - min(x)) * (stop - start) / (max(x) - min(x))

    Args:
        nums: Numbers to map
        start: Start of the interval
        stop: End of the interval
        skipna: Ignore NaN when computing the range

    Returns:
        Array of mapped numbers
    """
    nums = np.asarray(nums, dtype=float)
    low, high = (np.nanmin(nums), np.nanmax(nums)) if skipna else (np.min(nums), np.max(nums))
    return start + (nums - low) * (stop - start) / (high - low)
