"""
Dense matrix helpers used by the state-space model and its composition operators.

Thin layer over numpy / scipy so that the model code only ever sees 2-D float64
matrices and 1-D float64 vectors.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike
from scipy.linalg import block_diag as _scipy_block_diag

from ..errors import DimensionMismatchError, IndexOutOfRangeError, NullArgumentError


def as_matrix(value: Optional[ArrayLike], name: str = "matrix", copy: bool = True) -> np.ndarray:
    """
    Coerce an array-like to a 2-D float64 matrix.

    Args:
        value: Nested lists, scalar or ndarray
        name: Used in error messages
        copy: If False and value is already a float64 ndarray, the same
              storage is returned (aliasing)

    Returns:
        2-D float64 ndarray
    """
    if value is None:
        raise NullArgumentError(f"{name} must not be None")

    if copy:
        arr = np.array(value, dtype=np.float64)
    else:
        arr = np.asarray(value, dtype=np.float64)

    if arr.ndim < 2:
        # atleast_2d returns a view, so aliasing survives the promotion
        arr = np.atleast_2d(arr)
    if arr.ndim != 2:
        raise DimensionMismatchError(name, "dimension", 2, arr.ndim, "matrices must be 2-D")
    return arr


def as_vector(value: Optional[ArrayLike], name: str = "vector") -> np.ndarray:
    """Coerce an array-like to a fresh 1-D float64 vector. (n,1) and (1,n) are flattened."""
    if value is None:
        raise NullArgumentError(f"{name} must not be None")

    arr = np.array(value, dtype=np.float64)
    if arr.ndim == 0:
        return arr.reshape(1)
    if arr.ndim == 2 and 1 in arr.shape:
        return arr.reshape(-1)
    if arr.ndim != 1:
        raise DimensionMismatchError(name, "dimension", 1, arr.ndim, "vectors must be 1-D")
    return arr


def zeros(rows: int, cols: int) -> np.ndarray:
    return np.zeros((rows, cols), dtype=np.float64)


def ones(rows: int, cols: int) -> np.ndarray:
    return np.ones((rows, cols), dtype=np.float64)


def identity(rows: int, cols: Optional[int] = None) -> np.ndarray:
    """Ones on the main diagonal; rectangular when cols != rows."""
    return np.eye(rows, cols if cols is not None else rows, dtype=np.float64)


def set_block(target: np.ndarray, row: int, col: int, source: np.ndarray) -> np.ndarray:
    """
    Write source into target at (row, col), in place.

    Returns target so calls can be chained.
    """
    rows, cols = source.shape
    if row + rows > target.shape[0]:
        raise DimensionMismatchError(
            "block", "row", target.shape[0] - row, rows, f"does not fit at row offset {row}"
        )
    if col + cols > target.shape[1]:
        raise DimensionMismatchError(
            "block", "column", target.shape[1] - col, cols, f"does not fit at column offset {col}"
        )
    target[row:row + rows, col:col + cols] = source
    return target


def get_block(source: np.ndarray, row: int, col: int, rows: int, cols: int) -> np.ndarray:
    """Copy of the rows x cols sub-block starting at (row, col)."""
    if row + rows > source.shape[0]:
        raise DimensionMismatchError(
            "block", "row", source.shape[0] - row, rows, "requested block exceeds the source matrix"
        )
    if col + cols > source.shape[1]:
        raise DimensionMismatchError(
            "block", "column", source.shape[1] - col, cols, "requested block exceeds the source matrix"
        )
    return source[row:row + rows, col:col + cols].copy()


def block_diag(*blocks: np.ndarray) -> np.ndarray:
    """Join matrices along the diagonal; all cross blocks are zero."""
    return np.asarray(_scipy_block_diag(*blocks), dtype=np.float64)


def remove_row(matrix: np.ndarray, index: int) -> np.ndarray:
    """Return a new matrix without row `index`."""
    if index < 0 or index >= matrix.shape[0]:
        raise IndexOutOfRangeError(index, matrix.shape[0], "row")
    return np.delete(matrix, index, axis=0)


def matrices_equal(a: np.ndarray, b: np.ndarray) -> bool:
    """Exact equality of shape and every element."""
    return a.shape == b.shape and bool(np.array_equal(a, b))
