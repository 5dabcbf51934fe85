"""
Noise Sources

Scalar noise functions with the signature ``sample(seed, x, y) -> float``.

The vector field only ever calls the sampler once per cell at construction
time, so any deterministic function of (seed, x, y) can be injected in
place of the default OpenSimplex sampler.
"""

from functools import lru_cache

from opensimplex import OpenSimplex


@lru_cache(maxsize=16)
def _simplex_generator(seed):
    return OpenSimplex(seed)


def simplex_noise(seed, x, y):
    """
    2D OpenSimplex noise.

    Parameters
    ----------
    seed : int
        Noise seed
    x, y : float
        Sampling coordinates

    Returns
    -------
    value : float
        Noise value in [-1, 1]
    """
    return float(_simplex_generator(int(seed)).noise2(x, y))


def constant_noise(value):
    """
    Build a sampler returning the same value everywhere.

    Parameters
    ----------
    value : float
        Sample returned for every (seed, x, y)
    """
    def sample(seed, x, y):
        return value

    return sample
