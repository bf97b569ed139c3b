"""Random sources.

Event construction draws from an explicit ``numpy.random.Generator`` so a
seed reproduces a whole event set.  The animated particle path instead uses
a stateless hash of (seed, timestep) so repeated queries return identical
positions without threading a generator through the caller.
"""

import numpy as np


def make_rng(rng=None) -> np.random.Generator:
    """Accept None, an int seed, or an existing Generator (returned as-is)."""
    return np.random.default_rng(rng)


def uniform(rng: np.random.Generator, low: float, high: float) -> float:
    return float(rng.uniform(low, high))


def randint(rng: np.random.Generator, low: int, high: int) -> int:
    """Integer in [low, high] inclusive."""
    return int(rng.integers(low, high + 1))


def choice(rng: np.random.Generator, options):
    return options[int(rng.integers(len(options)))]


def pseudo_random(seed, timestep):
    """Hash-style value in [0, 1) from (seed, timestep); vectorised over seed."""
    x = np.sin(np.asarray(seed, dtype=np.float64) * 12.9898 + timestep * 0.1) * 43758.5453
    return x - np.floor(x)
