"""
Run Configuration

Parameters for one even-spaced curve placement run.

All core parameters are required keyword arguments. Invalid values raise
ValueError before any field or grid is built; values that are legal but
unlikely to give useful output only emit a warning.
"""

import warnings

from . import constants


class CurveConfig:
    """
    Configuration of an even-spaced curve run.

    Parameters
    ----------
    field_width, field_height : int
        Size of the vector field in cells
    n_steps : int
        Maximum number of samples per curve
    min_steps_allowed : int
        Curves with fewer samples are discarded
    n_curves : int
        Maximum number of accepted curves
    step_length : float
        Euler step length
    d_sep : float
        Minimum separation between curves, also the density cell size
    density_cell_capacity : int
        Maximum number of points stored per density cell
    noise_seed : int
        Seed passed to the noise source
    start_x, start_y : float
        Start point of the first curve
    noise_frequency : float
        Multiplier applied to the normalized sampling coordinates
    normalize_rows_by_height : bool
        Normalize the row coordinate by the field height instead of the width
    """

    def __init__(self, *, field_width, field_height, n_steps, min_steps_allowed,
                 n_curves, step_length, d_sep, density_cell_capacity,
                 noise_seed, start_x, start_y, noise_frequency=1.0,
                 normalize_rows_by_height=False):
        self.field_width = int(field_width)
        self.field_height = int(field_height)
        self.n_steps = int(n_steps)
        self.min_steps_allowed = int(min_steps_allowed)
        self.n_curves = int(n_curves)
        self.step_length = float(step_length)
        self.d_sep = float(d_sep)
        self.density_cell_capacity = int(density_cell_capacity)
        self.noise_seed = int(noise_seed)
        self.start_x = float(start_x)
        self.start_y = float(start_y)
        self.noise_frequency = float(noise_frequency)
        self.normalize_rows_by_height = bool(normalize_rows_by_height)

        self.validate()

    @classmethod
    def default(cls, **overrides):
        """Default 120 x 120 run, with keyword overrides."""
        params = dict(
            field_width=constants.FIELD_WIDTH,
            field_height=constants.FIELD_HEIGHT,
            n_steps=constants.N_STEPS,
            min_steps_allowed=constants.MIN_STEPS_ALLOWED,
            n_curves=constants.N_CURVES,
            step_length=constants.STEP_LENGTH,
            d_sep=constants.D_SEP,
            density_cell_capacity=constants.DENSITY_CELL_CAPACITY,
            noise_seed=constants.NOISE_SEED,
            start_x=constants.START_X,
            start_y=constants.START_Y,
        )
        params.update(overrides)
        return cls(**params)

    def validate(self):
        """
        Check parameter ranges.

        Raises
        ------
        ValueError
            If a parameter would make the field or the density grid undefined
        """
        if self.field_width <= 0 or self.field_height <= 0:
            raise ValueError(
                f"Field size must be positive, got "
                f"{self.field_width} x {self.field_height}"
            )
        if self.n_steps <= 0:
            raise ValueError(f"n_steps must be > 0, got {self.n_steps}")
        if self.min_steps_allowed < 0:
            raise ValueError(
                f"min_steps_allowed must be >= 0, got {self.min_steps_allowed}"
            )
        if self.n_curves <= 0:
            raise ValueError(f"n_curves must be > 0, got {self.n_curves}")
        if self.step_length <= 0:
            raise ValueError(f"step_length must be > 0, got {self.step_length}")
        if self.d_sep <= 0:
            raise ValueError(f"d_sep must be > 0, got {self.d_sep}")
        if self.density_cell_capacity <= 0:
            raise ValueError(
                f"density_cell_capacity must be > 0, "
                f"got {self.density_cell_capacity}"
            )
        if self.noise_frequency <= 0:
            raise ValueError(
                f"noise_frequency must be > 0, got {self.noise_frequency}"
            )
        if not (0 < self.start_x < self.field_width and
                0 < self.start_y < self.field_height):
            raise ValueError(
                f"Start point ({self.start_x}, {self.start_y}) lies outside the "
                f"{self.field_width} x {self.field_height} field"
            )

        if self.min_steps_allowed > self.n_steps:
            warnings.warn(
                f"min_steps_allowed = {self.min_steps_allowed} exceeds "
                f"n_steps = {self.n_steps}; only the first curve will be kept."
            )
        return self

    def as_dict(self):
        return dict(vars(self))

    def __repr__(self):
        params = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"CurveConfig({params})"
