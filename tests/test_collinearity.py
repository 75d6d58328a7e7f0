"""
test_collinearity.py
--------------------

Tests for the advisory pairwise-correlation check.
"""

import warnings

import numpy as np
import pytest

from ropemix.errors import CollinearityWarning
from ropemix.rope import check_multicollinearity, pairwise_correlations, rope_overlap


@pytest.fixture
def correlated_table(rng):
    a = rng.normal(size=2000)
    return {
        "Intercept": a.copy(),
        "a": a,
        "b": a + rng.normal(scale=0.1, size=2000),
        "c": rng.normal(size=2000),
    }


def test_pairwise_correlations_skip_intercept(correlated_table):
    corr = pairwise_correlations(correlated_table)
    assert corr.columns.tolist() == ["Parameter1", "Parameter2", "r"]
    names = set(corr["Parameter1"]) | set(corr["Parameter2"])
    assert "Intercept" not in names
    # three parameters -> three unordered pairs
    assert len(corr) == 3


def test_flags_correlated_pair(correlated_table):
    with pytest.warns(CollinearityWarning, match="a and b"):
        flagged = check_multicollinearity(correlated_table)
    assert len(flagged) == 1
    assert flagged["r"].iloc[0] > 0.9


def test_independent_parameters_pass_quietly(rng):
    table = {"x": rng.normal(size=1000), "y": rng.normal(size=1000)}
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        flagged = check_multicollinearity(table)
    assert flagged.empty


def test_single_parameter_returns_empty(rng):
    assert pairwise_correlations({"x": rng.normal(size=100)}).empty


def test_large_offset_columns_still_correlate(rng):
    a = rng.normal(size=2000)
    table = {"a": 1e8 + a, "b": 1e8 + a + rng.normal(scale=0.1, size=2000)}
    corr = pairwise_correlations(table)
    assert corr["r"].iloc[0] > 0.9


def test_check_never_changes_percentages(correlated_table):
    plain = rope_overlap(correlated_table, range=(-0.1, 0.1), verbose=False)
    with pytest.warns(CollinearityWarning):
        checked = rope_overlap(correlated_table, range=(-0.1, 0.1), check_collinearity=True)
    np.testing.assert_array_equal(plain.percentages, checked.percentages)


def test_quiet_check(correlated_table):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        flagged = check_multicollinearity(correlated_table, verbose=False)
    assert len(flagged) == 1
