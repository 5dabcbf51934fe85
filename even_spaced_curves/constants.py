"""
Even-Spaced Curve Constants

Default parameters and tags shared by the field, the density grid and the
tracer.
"""
import numpy as np

# Direction tags stored with every curve sample
#
#     backward  <---- start ---->  forward
#        0                           1
DIRECTION_BACKWARD = 0
DIRECTION_FORWARD = 1

# Relative tolerance subtracted from d_sep before the spacing test
D_TEST_TOLERANCE = 0.01

# Noise samples in [-1, 1] are scaled to angles in radians
ANGLE_SCALE = 2.0 * np.pi

# Default run parameters
FIELD_WIDTH = 120
FIELD_HEIGHT = 120
N_STEPS = 30
MIN_STEPS_ALLOWED = 5
N_CURVES = 1500
STEP_LENGTH = 0.01 * FIELD_WIDTH
D_SEP = 0.8
DENSITY_CELL_CAPACITY = 5000
NOISE_SEED = 50
START_X = 45.0
START_Y = 24.0


def d_test(d_sep):
    """Separation threshold actually used by the spacing test."""
    return d_sep - D_TEST_TOLERANCE * d_sep
