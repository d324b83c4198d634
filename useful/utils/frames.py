"""
Data-frame helpers.

Viewing corners of large frames, reordering columns, shifting columns
against each other and removing order-insensitive duplicate rows.
"""

import numpy as np
import pandas as pd
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple, Union


class Corner(Enum):
    """Corner of a two dimensional object."""

    TOPLEFT = 'topleft'
    BOTTOMLEFT = 'bottomleft'
    TOPRIGHT = 'topright'
    BOTTOMRIGHT = 'bottomright'


def which_corner(corner: Union[Corner, str] = Corner.TOPLEFT,
                 r: int = 5,
                 c: int = 5,
                 nrow: Optional[int] = None,
                 ncol: Optional[int] = None) -> Tuple[range, range]:
    """
    Compute the row and column positions of a corner.

    Args:
        corner: Which corner
        r: Number of rows
        c: Number of columns
        nrow: Total number of rows (defaults to r)
        ncol: Total number of columns (defaults to c)

    Returns:
        Tuple of (row positions, column positions), both ascending
    """
    corner = Corner(corner)
    nrow = r if nrow is None else nrow
    ncol = c if ncol is None else ncol
    r = min(r, nrow)
    c = min(c, ncol)

    rows = range(nrow - r, nrow) if corner in (Corner.BOTTOMLEFT, Corner.BOTTOMRIGHT) else range(r)
    cols = range(ncol - c, ncol) if corner in (Corner.TOPRIGHT, Corner.BOTTOMRIGHT) else range(c)
    return rows, cols


def corner(x: Any, r: int = 5, c: int = 5, corner: Union[Corner, str] = Corner.TOPLEFT) -> Any:
    """
    Grab a corner of the data, like head or tail in two dimensions.

    Args:
        x: DataFrame, 2-D array, or any sequence
        r: Number of rows
        c: Number of columns
        corner: Which corner ('topleft', 'bottomleft', 'topright', 'bottomright')

    Returns:
        The corner, of the same type as x
    """
    if isinstance(x, pd.DataFrame):
        rows, cols = which_corner(corner, r, c, *x.shape)
        return x.iloc[list(rows), list(cols)]

    if isinstance(x, np.ndarray) and x.ndim == 2:
        rows, cols = which_corner(corner, r, c, *x.shape)
        return x[rows.start:rows.stop, cols.start:cols.stop]

    if isinstance(x, pd.Series):
        return x.head(r)
    return x[:r]


def cols_to_front(data: pd.DataFrame, cols: Optional[Sequence[Any]] = None) -> List[Any]:
    """
    Column names with the given columns moved to the front.

    Args:
        data: DataFrame
        cols: Columns to move

    Returns:
        List of column names
    """
    cols = list(data.columns) if cols is None else list(cols)
    back = [col for col in data.columns if col not in cols]
    return cols + back


def cols_to_back(data: pd.DataFrame, cols: Optional[Sequence[Any]] = None) -> List[Any]:
    """
    Column names with the given columns moved to the back.

    Args:
        data: DataFrame
        cols: Columns to move

    Returns:
        List of column names
    """
    cols = list(data.columns) if cols is None else list(cols)
    front = [col for col in data.columns if col not in cols]
    return front + cols


def move_to_front(data: pd.DataFrame, cols: Sequence[Any]) -> pd.DataFrame:
    """Reorder a DataFrame so that cols come first."""
    return data[cols_to_front(data, cols)]


def move_to_back(data: pd.DataFrame, cols: Sequence[Any]) -> pd.DataFrame:
    """Reorder a DataFrame so that cols come last."""
    return data[cols_to_back(data, cols)]


def shift_column(data: pd.DataFrame,
                 columns: Union[str, Sequence[str]],
                 new_names: Optional[Union[str, Sequence[str]]] = None,
                 length: int = 1,
                 up: bool = True) -> pd.DataFrame:
    """
    Add shifted copies of columns next to the original data.

    With up=True row i of the new column holds row i + length of the
    original; the last `length` rows have no partner and are dropped.
    With up=False the shift goes the other way and the first rows are dropped.

    Args:
        data: DataFrame
        columns: Column or columns to shift
        new_names: Names of the shifted columns (default '<column>.Shifted')
        length: Number of rows to shift by
        up: Direction of the shift

    Returns:
        DataFrame with len(data) - length rows
    """
    columns = [columns] if isinstance(columns, str) else list(columns)
    if new_names is None:
        new_names = [f"{col}.Shifted" for col in columns]
    new_names = [new_names] if isinstance(new_names, str) else list(new_names)

    if len(columns) != len(new_names):
        raise ValueError("columns and new_names must be the same length")

    n_rows = len(data)
    if length < 0 or length > n_rows:
        raise ValueError(f"'length' must be between 0 and the number of rows ({n_rows}), got {length}")

    keep = n_rows - length
    shifted_start = length if up else 0
    data_start = 0 if up else length

    result = data.iloc[data_start:data_start + keep].copy()
    shifted = data[columns].iloc[shifted_start:shifted_start + keep].to_numpy()
    for i, name in enumerate(new_names):
        result[name] = shifted[:, i]

    return result


def unique_bidirection(x: pd.DataFrame) -> pd.DataFrame:
    """
    Unique rows, treating rows with the same values in any order as equal.

    Each row is sorted before duplicates are removed, so (a, b) and (b, a)
    collapse to a single row (a, b).

    Args:
        x: DataFrame

    Returns:
        DataFrame with the same column names
    """
    if not isinstance(x, pd.DataFrame):
        raise TypeError('x must be a DataFrame')

    rows = [sorted(row, key=str) for row in x.drop_duplicates().itertuples(index=False)]
    result = pd.DataFrame(rows, columns=x.columns)
    return result.drop_duplicates().reset_index(drop=True)
