"""
Even-Spaced Curve Placement

Jobard-Lefer style placement of evenly spaced streamlines.

Reference: B. Jobard and W. Lefer (1997) "Creating Evenly-Spaced
Streamlines of Arbitrary Density", Visualization in Scientific Computing.

The accepted curves double as the work queue: a cursor walks the list while
new curves are appended behind it. For the curve under the cursor, every
seed point that passes the density test starts a new curve; curves shorter
than ``min_steps_allowed`` are thrown away before touching the density
grid. The run stops when the cursor catches up with the list or when
``n_curves`` curves have been accepted.
"""

import time

from .density_grid import DensityGrid
from .seed_points import collect_seedpoints
from .tracer import draw_curve
from .vector_field import VectorField


def even_spaced_curves(x_start, y_start, n_curves, n_steps, min_steps_allowed,
                       step_length, d_sep, flow_field, density_grid,
                       stats=None):
    """
    Place evenly spaced curves starting from a single point.

    Parameters
    ----------
    x_start, y_start : float
        Start point of the first curve
    n_curves : int
        Maximum number of accepted curves
    n_steps : int
        Maximum number of samples per curve
    min_steps_allowed : int
        Curves with fewer samples are discarded (first curve excepted)
    step_length : float
        Euler step length
    d_sep : float
        Offset of seed points from their parent curve
    flow_field : VectorField
        Direction field
    density_grid : DensityGrid
        Grid receiving the points of every accepted curve
    stats : dict, optional
        Updated in place with ``seeds_tested``, ``seeds_rejected`` and
        ``curves_discarded`` counts

    Returns
    -------
    curves : list of Curve
        Accepted curves, ids equal to their list position

    Raises
    ------
    ValueError
        If the start point is off the field
    """
    if stats is None:
        stats = {}
    stats.setdefault("seeds_tested", 0)
    stats.setdefault("seeds_rejected", 0)
    stats.setdefault("curves_discarded", 0)

    if flow_field.off_boundaries(x_start, y_start):
        raise ValueError(
            f"Start point ({x_start}, {y_start}) lies outside the "
            f"{flow_field.width} x {flow_field.height} field"
        )

    curves = []
    first = draw_curve(
        len(curves), x_start, y_start, n_steps, step_length,
        flow_field, density_grid
    )
    curves.append(first)
    density_grid.insert_curve_coords(first)

    cursor = 0
    while cursor < len(curves) and len(curves) < n_curves:
        queue = collect_seedpoints(curves[cursor], d_sep)

        for point in queue:
            if len(curves) >= n_curves:
                break

            stats["seeds_tested"] += 1
            if not density_grid.is_valid_next_step(point.x, point.y):
                stats["seeds_rejected"] += 1
                continue

            curve = draw_curve(
                len(curves), point.x, point.y, n_steps, step_length,
                flow_field, density_grid
            )
            if curve.steps_taken < min_steps_allowed:
                stats["curves_discarded"] += 1
                continue

            curves.append(curve)
            density_grid.insert_curve_coords(curve)

        cursor += 1

    return curves


class EvenSpacedCurvesSolver:
    """
    Build the field and density grid from a configuration and place curves.

    Parameters
    ----------
    config : CurveConfig
        Run parameters
    noise : callable, optional
        Sampler ``noise(seed, x, y) -> float``; OpenSimplex if None
    flow_field : VectorField, optional
        Precomputed field; built from ``noise`` if None
    """

    def __init__(self, config, noise=None, flow_field=None):
        self.config = config

        if flow_field is None:
            flow_field = VectorField(
                config.noise_seed, config.field_width, config.field_height,
                noise=noise, frequency=config.noise_frequency,
                normalize_rows_by_height=config.normalize_rows_by_height
            )
        elif (flow_field.width, flow_field.height) != (config.field_width,
                                                       config.field_height):
            raise ValueError(
                f"Field size {flow_field.width} x {flow_field.height} does not "
                f"match configuration {config.field_width} x {config.field_height}"
            )
        self.flow_field = flow_field

        self.density_grid = DensityGrid(
            config.d_sep, config.field_width, config.field_height,
            config.density_cell_capacity
        )

        self.curves = []
        self.stats = {}
        self.elapsed = 0.0

    @property
    def curves_accepted(self):
        return len(self.curves)

    @property
    def curves_discarded(self):
        return self.stats.get("curves_discarded", 0)

    @property
    def seeds_rejected(self):
        return self.stats.get("seeds_rejected", 0)

    @property
    def dropped_points(self):
        return self.density_grid.dropped_points

    def run(self, verbose=True):
        """
        Place the curves.

        A solver can be run more than once; the density grid is cleared
        before every run.

        Parameters
        ----------
        verbose : bool
            Print a summary

        Returns
        -------
        curves : list of Curve
            Accepted curves
        """
        cfg = self.config
        self.density_grid.clear()
        self.stats = {}

        start = time.perf_counter()
        self.curves = even_spaced_curves(
            cfg.start_x, cfg.start_y,
            cfg.n_curves,
            cfg.n_steps,
            cfg.min_steps_allowed,
            cfg.step_length,
            cfg.d_sep,
            self.flow_field,
            self.density_grid,
            stats=self.stats,
        )
        self.elapsed = time.perf_counter() - start

        if verbose:
            print(f"Accepted curves: {self.curves_accepted} / {cfg.n_curves}")
            print(f"Discarded curves: {self.curves_discarded}")
            print(f"Rejected seeds: {self.seeds_rejected} / "
                  f"{self.stats['seeds_tested']}")
            if self.dropped_points:
                print(f"Warning: {self.dropped_points} points dropped "
                      f"from full density cells")
            print(f"Placement time: {self.elapsed:.2f}s")

        return self.curves
