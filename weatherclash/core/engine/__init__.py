"""Core engine plumbing.

- random_source.py: Injectable, seedable random source
"""

from .random_source import RandomSource, create_rng, draw

__all__ = [
    "RandomSource",
    "create_rng",
    "draw",
]
