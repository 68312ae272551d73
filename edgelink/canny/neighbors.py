"""
Boundary-safe neighbor lookup on a magnitude plane.
"""

import numpy as np


class NeighborSampler:
    """
    Reads values at relative offsets from a 2-D plane.

    Offsets that leave the grid read as zero instead of failing, so border
    cells compare against an implicit zero padding.
    """

    def __init__(self, plane: np.ndarray):
        """
        Args:
            plane: 2-D magnitude array
        """
        if plane.ndim != 2:
            raise ValueError(f"NeighborSampler expects a 2-D plane, got shape {plane.shape}")
        self._plane = plane
        self._rows, self._cols = plane.shape
        self._zero = plane.dtype.type(0)

    def sample(self, row: int, col: int, d_row: int, d_col: int):
        """
        Get the value at (row + d_row, col + d_col), or zero outside the grid.
        """
        r = row + d_row
        c = col + d_col
        if r < 0 or r >= self._rows or c < 0 or c >= self._cols:
            return self._zero
        return self._plane[r, c]

    def shifted(self, d_row: int, d_col: int) -> np.ndarray:
        """
        Get the whole plane as seen from a single-cell offset.

        shifted(dr, dc)[i, j] == sample(i, j, dr, dc) for every cell.

        Args:
            d_row: Row offset in {-1, 0, 1}
            d_col: Column offset in {-1, 0, 1}

        Returns:
            New array with the plane's shape and dtype
        """
        if abs(d_row) > 1 or abs(d_col) > 1:
            raise ValueError(f"Offset must be a single cell, got ({d_row}, {d_col})")

        padded = np.pad(self._plane, 1, mode="constant", constant_values=0)
        return padded[
            1 + d_row:1 + d_row + self._rows,
            1 + d_col:1 + d_col + self._cols,
        ].copy()
