"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable draws and tables shared across multiple test files.

Notes
-----
- Contributors should install the package in editable mode
  (`pip install -e .[test]`) so that imports are resolved consistently in
  local dev and CI environments.
- Keep this file focused on test setup. Do not add application logic here.
"""

import numpy as np
import pytest

from ropemix.data import ParameterTable


@pytest.fixture
def rng():
    """Seeded NumPy generator for reproducible draws."""
    return np.random.default_rng(2024)


@pytest.fixture
def null_draws(rng):
    """1000 draws tightly concentrated at 0."""
    return rng.normal(0.0, 0.01, 1000)


@pytest.fixture
def shifted_draws(rng):
    """1000 draws tightly concentrated at 1."""
    return rng.normal(1.0, 0.01, 1000)


@pytest.fixture
def evenly_spaced():
    """Draws 0, 1, ..., 99: every interval is known in closed form."""
    return np.arange(100.0)


@pytest.fixture
def two_param_table(null_draws, shifted_draws):
    """Table with one null and one clearly non-null parameter."""
    return ParameterTable({"null": null_draws, "effect": shifted_draws})
