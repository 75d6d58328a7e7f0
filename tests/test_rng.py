"""
test_rng.py
-----------

Tests for PRNG key helpers and MixtureConfig validation.
"""

import jax.random as jr
import numpy as np
import pytest

from ropemix.config import MixtureConfig
from ropemix.errors import InvalidArgumentError
from ropemix.utils import default_key, seed, split


def test_seed_is_deterministic():
    a = jr.uniform(seed(3), (4,))
    b = jr.uniform(seed(3), (4,))
    np.testing.assert_array_equal(a, b)


def test_split_returns_independent_keys():
    keys = split(seed(0), 3)
    assert len(keys) == 3
    draws = [float(jr.uniform(k)) for k in keys]
    assert len(set(draws)) == 3


def test_default_key_passthrough():
    key = seed(5)
    assert default_key(key) is key
    assert default_key(None) is not None


def test_mixture_config_validation():
    assert MixtureConfig().missing == 0.0
    with pytest.raises(InvalidArgumentError):
        MixtureConfig(iterations=0)
