"""
rng.py
------

Random number utilities for ropemix.

Row selection in the mixture engine is the only randomized step, and it
always runs off an explicit JAX PRNG key. These helpers make creating and
splitting keys uniform across the package.

Examples
--------
>>> from ropemix.utils.rng import seed, split
>>> key = seed(0)
>>> k1, k2 = split(key)
"""

from __future__ import annotations

import time
from typing import Any

import jax.random as jr


def seed(seed_value: int) -> Any:
    """
    Key for a reproducible mixture.

    Passing ``key=seed(n)`` to :func:`ropemix.mixture.weighted_mixture` (or
    its front-ends) fixes which rows every model contributes, so the same
    inputs and seed always give the same mixture table.

    Parameters
    ----------
    seed_value : int

    Returns
    -------
    jax.Array
    """
    return jr.PRNGKey(seed_value)


def split(key: Any, num: int = 2):
    """
    Derive ``num`` subkeys from ``key``.

    The mixture engine splits once per call into one subkey per input
    model, zero-weight models included, so a model dropped from sampling
    does not shift the subkeys of the models after it.

    Parameters
    ----------
    key : jax.Array
    num : int, default=2
        Number of subkeys, e.g. the number of models being mixed.

    Returns
    -------
    jax.Array, shape (num, ...)
        Row ``i`` is the subkey for model ``i``.
    """
    return jr.split(key, num=num)


def default_key(key: Any | None = None) -> Any:
    """Return ``key`` unchanged, or a fresh time-seeded key if it is None."""
    if key is None:
        return seed(int(time.time() * 1e6) % 2**32)
    return key
