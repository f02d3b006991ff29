"""Injectable random source for the engine.

Every random draw the engine makes goes through a ``RandomSource`` passed in
by the caller, so a battle can be replayed from a seed. Any object with a
``random()`` method returning a float in [0, 1) qualifies; the default is a
``numpy.random.Generator``.
"""

from typing import Optional, Protocol, Union

import numpy as np


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float:
        ...


def create_rng(seed: Optional[Union[int, "RandomSource"]] = None) -> RandomSource:
    """Return a usable random source.

    Args:
        seed: None for fresh OS entropy, an int seed, or an existing source
            which is returned unchanged

    Returns:
        A random source
    """
    if seed is None or isinstance(seed, (int, np.integer)):
        return np.random.default_rng(seed)
    return seed


def draw(rng: RandomSource) -> float:
    """Draw one uniform float in [0, 1) as a plain Python float."""
    return float(rng.random())
