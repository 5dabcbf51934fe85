"""
Density Grid

Spatial buckets of accepted curve samples used to enforce the minimum
separation d_sep between curves.

The grid cell size equals d_sep, so every stored point closer than d_sep to
a query point lies in the 3 x 3 block of cells around the query's cell:

    +-----+-----+-----+
    | r-1 | r-1 | r-1 |
    | c-1 |  c  | c+1 |
    +-----+-----+-----+
    |  r  |  q  |  r  |
    | c-1 |     | c+1 |
    +-----+-----+-----+
    | r+1 | r+1 | r+1 |
    | c-1 |  c  | c+1 |
    +-----+-----+-----+

The block is clamped at the grid edges, never wrapped.

Storage uses Structure of Arrays layout: cell_x and cell_y have shape
(n_rows, n_cols, depth) and ``used`` counts the filled slots per cell.
``depth`` grows on demand up to the configured cell capacity.
"""

import math
import warnings

import numpy as np
from numba import njit

from .constants import d_test as separation_threshold


class CapacityExceededWarning(UserWarning):
    """A density cell was full and a point was dropped."""


def neighbourhood_bounds(col, row, n_cols, n_rows):
    """
    Inclusive cell bounds of the 3 x 3 neighbourhood, clamped to the grid.

    Returns
    -------
    start_col, end_col, start_row, end_row : int
    """
    start_col = col - 1 if col > 0 else 0
    end_col = col + 1 if col + 1 < n_cols else n_cols - 1
    start_row = row - 1 if row > 0 else 0
    end_row = row + 1 if row + 1 < n_rows else n_rows - 1
    return start_col, end_col, start_row, end_row


def neighbourhood_is_clear(cell_x, cell_y, used, col, row, x, y, d_test):
    """
    Check that no stored point in the 3 x 3 neighbourhood is within d_test.

    Reference NumPy implementation of the density scan.

    Parameters
    ----------
    cell_x, cell_y : ndarray
        Stored coordinates, shape (n_rows, n_cols, depth)
    used : ndarray
        Number of stored points per cell, shape (n_rows, n_cols)
    col, row : int
        Cell containing the query point
    x, y : float
        Query point
    d_test : float
        Rejection distance (inclusive)

    Returns
    -------
    clear : bool
        False if any neighbour lies at distance <= d_test
    """
    n_rows, n_cols = used.shape
    start_col, end_col, start_row, end_row = neighbourhood_bounds(
        col, row, n_cols, n_rows
    )

    for r in range(start_row, end_row + 1):
        for c in range(start_col, end_col + 1):
            n = used[r, c]
            if n == 0:
                continue
            dist = np.sqrt((cell_x[r, c, :n] - x) ** 2 + (cell_y[r, c, :n] - y) ** 2)
            if np.any(dist <= d_test):
                return False

    return True


@njit(cache=True)
def neighbourhood_is_clear_numba(cell_x, cell_y, used, col, row, x, y, d_test):
    """
    Numba-accelerated density scan.

    Same contract as ``neighbourhood_is_clear``.
    """
    n_rows, n_cols = used.shape

    start_col = col - 1 if col > 0 else 0
    end_col = col + 1 if col + 1 < n_cols else n_cols - 1
    start_row = row - 1 if row > 0 else 0
    end_row = row + 1 if row + 1 < n_rows else n_rows - 1

    for r in range(start_row, end_row + 1):
        for c in range(start_col, end_col + 1):
            for k in range(used[r, c]):
                dx = cell_x[r, c, k] - x
                dy = cell_y[r, c, k] - y
                if math.sqrt(dx * dx + dy * dy) <= d_test:
                    return False

    return True


class DensityGrid:
    """
    Bucketed store of accepted curve samples.

    Parameters
    ----------
    d_sep : float
        Minimum separation, also the cell size (> 0)
    width, height : int
        Size of the vector field being covered (> 0)
    cell_capacity : int
        Maximum number of points per cell (> 0)
    initial_depth : int
        Number of slots allocated per cell up front
    """

    def __init__(self, d_sep, width, height, cell_capacity, initial_depth=8):
        if d_sep <= 0:
            raise ValueError(f"d_sep must be > 0, got {d_sep}")
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Density grid field size must be positive, got {width} x {height}"
            )
        if cell_capacity <= 0:
            raise ValueError(f"cell_capacity must be > 0, got {cell_capacity}")

        self.d_sep = float(d_sep)
        self.d_test = separation_threshold(self.d_sep)
        self.field_width = width
        self.field_height = height
        self.n_cols = int(math.ceil(width / self.d_sep))
        self.n_rows = int(math.ceil(height / self.d_sep))
        self.capacity = int(cell_capacity)

        depth = max(1, min(int(initial_depth), self.capacity))
        self.cell_x = np.zeros((self.n_rows, self.n_cols, depth), dtype=np.float64)
        self.cell_y = np.zeros((self.n_rows, self.n_cols, depth), dtype=np.float64)
        self.used = np.zeros((self.n_rows, self.n_cols), dtype=np.int64)

        self.dropped_points = 0
        self.last_dropped = None

    @property
    def shape(self):
        """Grid size as (n_rows, n_cols)."""
        return self.n_rows, self.n_cols

    @property
    def total_points(self):
        return int(self.used.sum())

    def get_density_col(self, x):
        return int(math.floor(x / self.d_sep))

    def get_density_row(self, y):
        return int(math.floor(y / self.d_sep))

    def off_boundaries(self, x, y):
        if x <= 0 or y <= 0 or x >= self.field_width or y >= self.field_height:
            return True
        return (
            self.get_density_col(x) >= self.n_cols or
            self.get_density_row(y) >= self.n_rows
        )

    def _grow(self):
        """Double the per-cell slot depth, never beyond the capacity."""
        depth = self.cell_x.shape[2]
        new_depth = min(2 * depth, self.capacity)
        pad = ((0, 0), (0, 0), (0, new_depth - depth))
        self.cell_x = np.pad(self.cell_x, pad)
        self.cell_y = np.pad(self.cell_y, pad)

    def insert_coord(self, x, y):
        """
        Store a point in its cell.

        Returns
        -------
        stored : bool
            False if the point is off the grid or its cell is full
        """
        if self.off_boundaries(x, y):
            return False

        col = self.get_density_col(x)
        row = self.get_density_row(y)
        n = self.used[row, col]

        if n >= self.capacity:
            self.dropped_points += 1
            self.last_dropped = (x, y)
            warnings.warn(
                f"Density cell at capacity {self.capacity}; point dropped. "
                f"Increase the cell capacity or d_sep.",
                CapacityExceededWarning,
                stacklevel=2,
            )
            return False

        if n >= self.cell_x.shape[2]:
            self._grow()

        self.cell_x[row, col, n] = x
        self.cell_y[row, col, n] = y
        self.used[row, col] = n + 1
        return True

    def insert_curve_coords(self, curve):
        """
        Store every sample of a traced curve.

        Returns
        -------
        n_stored : int
            Number of samples actually stored
        """
        n_stored = 0
        for x, y in zip(curve.x, curve.y):
            if self.insert_coord(float(x), float(y)):
                n_stored += 1
        return n_stored

    def points_in_cell(self, col, row):
        """Stored points of one cell, shape (n, 2)."""
        n = self.used[row, col]
        return np.column_stack((self.cell_x[row, col, :n], self.cell_y[row, col, :n]))

    def is_valid_next_step(self, x, y):
        """
        Check that (x, y) keeps the minimum separation from stored points.

        Returns
        -------
        valid : bool
            False if (x, y) is off the grid or a stored point lies within
            ``d_test = 0.99 * d_sep``
        """
        if self.off_boundaries(x, y):
            return False

        return neighbourhood_is_clear_numba(
            self.cell_x, self.cell_y, self.used,
            self.get_density_col(x), self.get_density_row(y),
            float(x), float(y), self.d_test
        )

    def clear(self):
        """Remove all stored points and reset the drop counter."""
        self.used[:] = 0
        self.dropped_points = 0
        self.last_dropped = None

    def __repr__(self):
        return (
            f"DensityGrid(d_sep={self.d_sep}, cells={self.n_cols} x {self.n_rows}, "
            f"points={self.total_points}, dropped={self.dropped_points})"
        )
