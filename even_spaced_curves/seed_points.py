"""
Seed Point Generation

Candidate start points for new curves, placed at distance d_sep on both
sides of an existing curve:

            left  (angle + pi/2)
              *
              |  d_sep
    ----------o---------->  tangent at sample i
              |  d_sep
              *
            right (angle - pi/2)
"""

import math

from .curve import Point


class SeedPointQueue:
    """
    Bounded, append-only list of seed points derived from one curve.

    Parameters
    ----------
    n_steps : int
        Number of curve samples; the queue holds at most 2 * n_steps points
    """

    def __init__(self, n_steps):
        self.capacity = 2 * max(int(n_steps), 0)
        self._points = []

    @property
    def space_used(self):
        return len(self._points)

    def is_empty(self):
        return not self._points

    def insert_point(self, point):
        if len(self._points) >= self.capacity:
            raise IndexError(
                f"Seed point queue is full (capacity {self.capacity})"
            )
        self._points.append(Point(*point))

    def insert_coord(self, x, y):
        self.insert_point(Point(x, y))

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]


def collect_seedpoints(curve, d_sep):
    """
    Seed points on both sides of every curve sample but the last.

    Parameters
    ----------
    curve : Curve
        Traced curve
    d_sep : float
        Offset from the curve

    Returns
    -------
    queue : SeedPointQueue
        Points ordered by sample, left before right
    """
    steps_taken = curve.steps_taken
    queue = SeedPointQueue(steps_taken)
    if steps_taken < 2:
        return queue

    xs = curve.x
    ys = curve.y
    for i in range(steps_taken - 1):
        x = float(xs[i])
        y = float(ys[i])
        angle = math.atan2(ys[i + 1] - y, xs[i + 1] - x)

        angle_left = angle + math.pi / 2
        angle_right = angle - math.pi / 2

        queue.insert_coord(x + d_sep * math.cos(angle_left),
                           y + d_sep * math.sin(angle_left))
        queue.insert_coord(x + d_sep * math.cos(angle_right),
                           y + d_sep * math.sin(angle_right))

    return queue
