"""
Even-spaced streamline placement over noise-derived vector fields.
"""

from .config import CurveConfig
from .curve import Curve, Point
from .density_grid import CapacityExceededWarning, DensityGrid
from .placer import EvenSpacedCurvesSolver, even_spaced_curves
from .seed_points import SeedPointQueue, collect_seedpoints
from .tracer import draw_curve
from .vector_field import VectorField

__version__ = "0.1.0"

__all__ = [
    "CapacityExceededWarning",
    "Curve",
    "CurveConfig",
    "DensityGrid",
    "EvenSpacedCurvesSolver",
    "Point",
    "SeedPointQueue",
    "VectorField",
    "collect_seedpoints",
    "draw_curve",
    "even_spaced_curves",
]
