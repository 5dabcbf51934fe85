"""
Curve Visualization

Plot placed curves and the underlying direction field.
"""

import matplotlib.pyplot as plt
import numpy as np

from even_spaced_curves.analysis import ordered_points


def plot_curves(curves, width, height, ax=None, color_by_direction=False,
                linewidth=0.8, color="black", save_path=None):
    """
    Draw every curve as a polyline.

    Parameters
    ----------
    curves : list of Curve
        Placed curves
    width, height : float
        Field extent, used for the axis limits
    ax : matplotlib Axes, optional
        Axes to draw into; a new figure is created if None
    color_by_direction : bool
        Draw backward samples in blue and forward samples in red
    linewidth : float
        Line width
    color : str
        Line color when not coloring by direction
    save_path : str, optional
        Path to save the figure

    Returns
    -------
    ax : matplotlib Axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8 * height / width))

    for curve in curves:
        if color_by_direction:
            points = curve.points()
            tags = curve.direction
            backward = np.concatenate((points[:1], points[1:][tags[1:] == 0]))
            forward = np.concatenate((points[:1], points[1:][tags[1:] == 1]))
            ax.plot(backward[:, 0], backward[:, 1], color="tab:blue", linewidth=linewidth)
            ax.plot(forward[:, 0], forward[:, 1], color="tab:red", linewidth=linewidth)
        else:
            points = ordered_points(curve)
            ax.plot(points[:, 0], points[:, 1], color=color, linewidth=linewidth)

    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    ax.set_aspect("equal")
    ax.axis("off")

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Saved figure to {save_path}")

    return ax


def plot_angle_field(flow_field, ax=None, stride=4):
    """
    Show the field angles with a quiver of unit directions on top.

    Parameters
    ----------
    flow_field : VectorField
        Direction field
    ax : matplotlib Axes, optional
        Axes to draw into
    stride : int
        Cell stride between arrows
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))

    angles = flow_field.angles
    im = ax.imshow(angles, origin="lower", cmap="twilight", aspect="equal",
                   extent=(0, flow_field.width, 0, flow_field.height))
    plt.colorbar(im, ax=ax, label="angle [rad]")

    rows = np.arange(0, flow_field.height, stride)
    cols = np.arange(0, flow_field.width, stride)
    C, R = np.meshgrid(cols, rows)
    sub = angles[R, C]
    ax.quiver(C + 0.5, R + 0.5, np.cos(sub), np.sin(sub),
              angles="xy", scale_units="xy", scale=1.0 / stride, width=0.002)
    ax.set_title("Direction field")

    return ax
