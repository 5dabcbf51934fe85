"""
Curve Tracer

Fixed-step Euler tracing through the vector field.

A curve is grown in two halves from its start point:

    x_{k+1} = x_k - h * (cos(theta), sin(theta))    backward, tag 0
    x_{k+1} = x_k + h * (cos(theta), sin(theta))    forward,  tag 1

where theta is the field angle of the cell containing x_k and h is the step
length. A half stops at the first step leaving the field or violating the
density constraint.
"""

import math

from .constants import DIRECTION_BACKWARD, DIRECTION_FORWARD
from .curve import Curve


def _trace_half(curve, x, y, i, limit, sign, direction, step_length,
                flow_field, density_grid):
    """Extend ``curve`` from (x, y) while ``i < limit``; return the new i."""
    while i < limit:
        if flow_field.off_boundaries(x, y):
            break

        angle = flow_field.get_angle(x, y)
        x = x + sign * step_length * math.cos(angle)
        y = y + sign * step_length * math.sin(angle)

        if flow_field.off_boundaries(x, y):
            break
        if not density_grid.is_valid_next_step(x, y):
            break

        curve.insert_step(x, y, direction)
        i += 1

    return i


def draw_curve(curve_id, x_start, y_start, n_steps, step_length,
               flow_field, density_grid):
    """
    Trace one curve from a start point.

    The start point is always the first sample. The backward half runs while
    the sample count is below n_steps // 2, the forward half while it is
    below n_steps, so a curve never has more than n_steps samples.

    Parameters
    ----------
    curve_id : int
        Identifier given to the curve
    x_start, y_start : float
        Start point
    n_steps : int
        Maximum number of samples
    step_length : float
        Euler step length
    flow_field : VectorField
        Direction field
    density_grid : DensityGrid
        Accepted points of previous curves; read only here

    Returns
    -------
    curve : Curve
        Traced curve with at least one sample
    """
    curve = Curve(curve_id, n_steps)
    curve.insert_step(x_start, y_start, DIRECTION_BACKWARD)

    i = _trace_half(
        curve, x_start, y_start, 1, n_steps // 2, -1.0, DIRECTION_BACKWARD,
        step_length, flow_field, density_grid
    )
    _trace_half(
        curve, x_start, y_start, i, n_steps, 1.0, DIRECTION_FORWARD,
        step_length, flow_field, density_grid
    )

    return curve
