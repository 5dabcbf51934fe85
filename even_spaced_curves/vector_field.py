"""
Vector Field

Discrete direction field derived from a scalar noise function.

Each cell (col, row) holds one angle in radians:

    angle[row, col] = 2*pi * noise(seed, f * col / W, f * row / W)

Both axes are normalized by the field width W, so a field with H != W is
sampled on a non-square region of noise space. Pass
``normalize_rows_by_height=True`` to divide the row coordinate by H instead.
"""

import math

import numpy as np

from .constants import ANGLE_SCALE
from .noise import simplex_noise


def sample_angles(seed, width, height, noise=simplex_noise, frequency=1.0,
                  normalize_rows_by_height=False):
    """
    Evaluate the noise function for every field cell.

    Parameters
    ----------
    seed : int
        Noise seed
    width, height : int
        Field size in cells
    noise : callable
        Sampler ``noise(seed, x, y) -> float``
    frequency : float
        Multiplier applied to the normalized coordinates
    normalize_rows_by_height : bool
        Divide the row index by ``height`` rather than ``width``

    Returns
    -------
    angles : ndarray
        Angle field in radians, shape (height, width)
    """
    row_scale = height if normalize_rows_by_height else width
    angles = np.empty((height, width), dtype=np.float64)

    for row in range(height):
        y = frequency * row / row_scale
        for col in range(width):
            x = frequency * col / width
            angles[row, col] = noise(seed, x, y) * ANGLE_SCALE

    return angles


class VectorField:
    """
    Immutable grid of direction angles.

    Parameters
    ----------
    seed : int
        Noise seed
    width, height : int
        Field size in cells (both > 0)
    noise : callable, optional
        Sampler ``noise(seed, x, y) -> float``; OpenSimplex if None
    frequency : float
        Multiplier applied to the normalized sampling coordinates
    normalize_rows_by_height : bool
        Normalize rows by the field height instead of the width
    """

    def __init__(self, seed, width, height, noise=None, frequency=1.0,
                 normalize_rows_by_height=False):
        _check_size(width, height)
        if noise is None:
            noise = simplex_noise

        self.seed = seed
        angles = sample_angles(
            seed, int(width), int(height), noise=noise, frequency=frequency,
            normalize_rows_by_height=normalize_rows_by_height
        )
        self._set_angles(angles)

    @classmethod
    def from_angles(cls, angles, seed=None):
        """
        Wrap a precomputed angle array.

        Parameters
        ----------
        angles : array_like
            Angles in radians, shape (height, width)
        seed : int, optional
            Seed recorded on the field, informational only
        """
        angles = np.array(angles, dtype=np.float64)
        if angles.ndim != 2:
            raise ValueError(f"angles must be 2D, got shape {angles.shape}")
        height, width = angles.shape
        _check_size(width, height)

        field = cls.__new__(cls)
        field.seed = seed
        field._set_angles(angles)
        return field

    @classmethod
    def uniform(cls, width, height, angle):
        """Field with the same angle in every cell."""
        _check_size(width, height)
        return cls.from_angles(np.full((int(height), int(width)), float(angle)))

    def _set_angles(self, angles):
        angles.setflags(write=False)
        self.angles = angles
        self.height, self.width = angles.shape

    def get_flow_field_col(self, x):
        return int(math.floor(x))

    def get_flow_field_row(self, y):
        return int(math.floor(y))

    def off_boundaries(self, x, y):
        return x <= 0 or y <= 0 or x >= self.width or y >= self.height

    def get_angle(self, x, y):
        """
        Angle of the cell containing (x, y).

        The point must have passed ``off_boundaries`` first.
        """
        return float(self.angles[self.get_flow_field_row(y),
                                 self.get_flow_field_col(x)])

    def __repr__(self):
        return f"VectorField(width={self.width}, height={self.height}, seed={self.seed})"


def _check_size(width, height):
    if width <= 0 or height <= 0:
        raise ValueError(
            f"Vector field size must be positive, got {width} x {height}"
        )
