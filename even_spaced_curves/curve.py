"""
Curve Storage

One traced streamline: parallel arrays of x, y, direction tag and step id.
"""

from collections import namedtuple

import numpy as np

from .constants import DIRECTION_BACKWARD, DIRECTION_FORWARD


Point = namedtuple("Point", ["x", "y"])


class Curve:
    """
    Append-only sequence of curve samples.

    Parameters
    ----------
    curve_id : int
        Identifier, increasing in acceptance order
    n_steps : int
        Expected number of samples, used to size the storage
    """

    def __init__(self, curve_id, n_steps):
        self.curve_id = curve_id
        self.steps_taken = 0

        size = max(int(n_steps), 1)
        self._x = np.empty(size, dtype=np.float64)
        self._y = np.empty(size, dtype=np.float64)
        self._direction = np.empty(size, dtype=np.int8)

    def insert_step(self, x, y, direction):
        """
        Append one sample.

        Parameters
        ----------
        x, y : float
            Sample position
        direction : int
            DIRECTION_BACKWARD (0) or DIRECTION_FORWARD (1)
        """
        if direction not in (DIRECTION_BACKWARD, DIRECTION_FORWARD):
            raise ValueError(f"direction must be 0 or 1, got {direction}")

        i = self.steps_taken
        if i == self._x.size:
            self._x = np.resize(self._x, 2 * i)
            self._y = np.resize(self._y, 2 * i)
            self._direction = np.resize(self._direction, 2 * i)

        self._x[i] = x
        self._y[i] = y
        self._direction[i] = direction
        self.steps_taken = i + 1

    @property
    def x(self):
        return self._x[:self.steps_taken]

    @property
    def y(self):
        return self._y[:self.steps_taken]

    @property
    def direction(self):
        return self._direction[:self.steps_taken]

    @property
    def step_id(self):
        return np.arange(self.steps_taken)

    def points(self):
        """Samples as an array of shape (steps_taken, 2)."""
        return np.column_stack((self.x, self.y))

    def __len__(self):
        return self.steps_taken

    def __iter__(self):
        for x, y in zip(self.x, self.y):
            yield Point(float(x), float(y))

    def __repr__(self):
        return f"Curve(id={self.curve_id}, steps_taken={self.steps_taken})"
