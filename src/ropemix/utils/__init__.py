"""
utils
=====

Shared helpers for ropemix.

- rng : JAX PRNG key creation and splitting.
"""

from .rng import default_key, seed, split

__all__ = [
    "default_key",
    "seed",
    "split",
]
