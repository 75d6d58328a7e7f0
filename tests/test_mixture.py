"""
test_mixture.py
---------------

Tests for the weighted posterior mixture.

Coverage:
- weights: normalization, allocation, prior odds
- weighted_mixture: allocation, column union, missing fill, sampling
  without replacement, zero-weight models, failure modes
- weighted_posteriors: prior-odds variant for tables
- weighted_posteriors_from_models: model-object variant with a placeholder
  for models that cannot be sampled
"""

import warnings

import numpy as np
import pytest

from ropemix.adapters import PosteriorDraws
from ropemix.config import MixtureConfig
from ropemix.errors import InsufficientSamplesError, InvalidArgumentError
from ropemix.mixture import (
    MixtureResult,
    allocate_draws,
    normalize_weights,
    weighted_mixture,
    weighted_posteriors,
    weighted_posteriors_from_models,
    weights_from_prior_odds,
)
from ropemix.utils import seed

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def model_a(rng):
    """Model estimating only 'a'."""
    return {"a": rng.normal(1.0, 0.1, 400)}


@pytest.fixture
def model_b(rng):
    """Model estimating 'a' and 'b'."""
    return {"a": rng.normal(2.0, 0.1, 400), "b": rng.normal(-1.0, 0.1, 400)}


# ============================================================================
# Weights
# ============================================================================


class TestWeights:
    def test_normalize(self):
        np.testing.assert_allclose(normalize_weights([3, 1]), [0.75, 0.25])

    @pytest.mark.parametrize("weights", [[], [0, 0], [1, -1], [1, np.nan]])
    def test_invalid_weights(self, weights):
        with pytest.raises(InvalidArgumentError):
            normalize_weights(weights)

    def test_allocation(self):
        assert allocate_draws(100, [0.75, 0.25]).tolist() == [75, 25]

    def test_allocation_rounds_half_to_even(self):
        assert allocate_draws(10, [0.25, 0.75]).tolist() == [2, 8]

    def test_allocation_is_not_rebalanced(self):
        counts = allocate_draws(100, normalize_weights([1, 1, 1]))
        assert counts.tolist() == [33, 33, 33]

    def test_allocation_requires_positive_total(self):
        with pytest.raises(InvalidArgumentError):
            allocate_draws(0, [1.0])

    def test_prior_odds(self):
        np.testing.assert_allclose(weights_from_prior_odds([2, 0.5], 3), [1, 2, 0.5])
        np.testing.assert_allclose(weights_from_prior_odds(3, 2), [1, 3])
        with pytest.raises(InvalidArgumentError):
            weights_from_prior_odds([1, 2], 2)


# ============================================================================
# weighted_mixture
# ============================================================================


class TestWeightedMixture:
    def test_allocated_counts_and_rows(self, model_a, model_b):
        mix = weighted_mixture([model_a, model_b], [0.75, 0.25], 100, key=seed(0))
        assert isinstance(mix, MixtureResult)
        assert mix.weights["weights"].tolist() == [75, 25]
        assert mix.weights["Model"].tolist() == ["Model 1", "Model 2"]
        assert mix.n_draws == 100
        assert len(mix) == 100

    def test_missing_parameter_filled(self, model_a, model_b):
        mix = weighted_mixture([model_a, model_b], [0.75, 0.25], 100, key=seed(0))
        assert mix.names == ["a", "b"]
        np.testing.assert_array_equal(mix["b"][:75], np.zeros(75))
        # model_b's own 'b' draws sit around -1
        assert np.all(mix["b"][75:] < -0.5)

    def test_custom_missing_value(self, model_a, model_b):
        mix = weighted_mixture([model_a, model_b], [1, 1], 50, missing=-9.0, key=seed(0))
        np.testing.assert_array_equal(mix["b"][:25], np.full(25, -9.0))

    def test_blocks_in_model_order(self, model_a, model_b):
        mix = weighted_mixture([model_a, model_b], [0.5, 0.5], 100, key=seed(1))
        assert np.all(mix["a"][:50] < 1.5)
        assert np.all(mix["a"][50:] > 1.5)

    def test_single_model_returns_target_rows(self):
        draws = {"a": np.arange(200.0), "b": np.arange(200.0) * 2}
        mix = weighted_mixture([draws], [1.0], 120, key=seed(3))
        assert mix.n_draws == 120
        assert mix.names == ["a", "b"]
        # rows stay aligned and no fill value appears
        np.testing.assert_array_equal(mix["b"], mix["a"] * 2)
        assert np.isin(mix["a"], draws["a"]).all()

    def test_draws_without_replacement(self):
        draws = {"a": np.arange(50.0)}
        mix = weighted_mixture([draws], [1.0], 50, key=seed(4))
        np.testing.assert_array_equal(np.sort(mix["a"]), draws["a"])

    def test_row_count_is_sum_of_allocations(self, rng):
        tables = [{"a": rng.normal(size=100)} for _ in range(3)]
        mix = weighted_mixture(tables, [1, 1, 1], 100, key=seed(5))
        assert mix.n_draws == mix.weights["weights"].sum() == 99

    def test_zero_allocation_model_dropped(self, model_a, rng):
        extra = {"a": rng.normal(size=400), "c": rng.normal(size=400)}
        mix = weighted_mixture([model_a, extra], [1.0, 0.0], 100, key=seed(0))
        assert mix.names == ["a"]
        assert mix.n_draws == 100
        assert mix.weights["weights"].tolist() == [100, 0]

    def test_reproducible_with_key(self, model_a, model_b):
        m1 = weighted_mixture([model_a, model_b], [0.6, 0.4], 100, key=seed(7))
        m2 = weighted_mixture([model_a, model_b], [0.6, 0.4], 100, key=seed(7))
        for name in m1.names:
            np.testing.assert_array_equal(m1[name], m2[name])

    def test_default_target_is_smallest_table(self, rng):
        tables = [{"a": rng.normal(size=300)}, {"a": rng.normal(size=200)}]
        mix = weighted_mixture(tables, [1, 1], key=seed(0))
        assert mix.weights["weights"].tolist() == [100, 100]

    def test_config_supplies_defaults(self, model_a, model_b):
        config = MixtureConfig(missing=5.0, iterations=40)
        mix = weighted_mixture([model_a, model_b], [1, 1], key=seed(0), config=config)
        assert mix.n_draws == 40
        np.testing.assert_array_equal(mix["b"][:20], np.full(20, 5.0))

    def test_model_names(self, model_a, model_b):
        mix = weighted_mixture(
            [model_a, model_b], [1, 1], 10, model_names=["m0", "m1"], key=seed(0)
        )
        assert mix.weights["Model"].tolist() == ["m0", "m1"]
        with pytest.raises(InvalidArgumentError):
            weighted_mixture([model_a, model_b], [1, 1], 10, model_names=["m0"])

    def test_to_frame(self, model_a, model_b):
        frame = weighted_mixture([model_a, model_b], [1, 1], 10, key=seed(0)).to_frame()
        assert frame.shape == (10, 2)
        assert frame.columns.tolist() == ["a", "b"]


class TestWeightedMixtureFailures:
    def test_empty_model_list(self):
        with pytest.raises(InvalidArgumentError):
            weighted_mixture([], [], 10)

    def test_weight_count_mismatch(self, model_a):
        with pytest.raises(InvalidArgumentError):
            weighted_mixture([model_a], [0.5, 0.5], 10)

    def test_negative_weight(self, model_a, model_b):
        with pytest.raises(InvalidArgumentError):
            weighted_mixture([model_a, model_b], [1.0, -0.5], 10)

    def test_zero_total_weight(self, model_a, model_b):
        with pytest.raises(InvalidArgumentError):
            weighted_mixture([model_a, model_b], [0.0, 0.0], 10)

    def test_insufficient_samples(self):
        small = {"a": np.arange(10.0)}
        with pytest.raises(InsufficientSamplesError):
            weighted_mixture([small], [1.0], 100)


# ============================================================================
# Variants
# ============================================================================


class TestWeightedPosteriors:
    def test_prior_odds_against_first(self, rng):
        t0 = {"a": rng.normal(size=400)}
        t1 = {"a": rng.normal(size=300)}
        mix = weighted_posteriors(t0, t1, prior_odds=3, key=seed(0))
        assert mix.weights["weights"].tolist() == [75, 225]
        assert mix.n_draws == 300

    def test_uniform_odds_warn(self, rng):
        t0 = {"a": rng.normal(size=200)}
        t1 = {"a": rng.normal(size=200)}
        with pytest.warns(UserWarning, match="uniform prior odds"):
            mix = weighted_posteriors(t0, t1, key=seed(0))
        assert mix.weights["weights"].tolist() == [100, 100]

    def test_config_silences_uniform_odds_warning(self, rng):
        t0 = {"a": rng.normal(size=200)}
        t1 = {"a": rng.normal(size=200)}
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            mix = weighted_posteriors(
                t0, t1, key=seed(0), config=MixtureConfig(verbose=False)
            )
        assert mix.n_draws == 200

    def test_config_supplies_iterations_and_missing(self, rng):
        t0 = {"a": rng.normal(size=200)}
        t1 = {"a": rng.normal(size=200), "b": rng.normal(size=200)}
        config = MixtureConfig(missing=-1.0, iterations=50)
        mix = weighted_posteriors(t0, t1, prior_odds=1, key=seed(0), config=config)
        assert mix.weights["weights"].tolist() == [25, 25]
        np.testing.assert_array_equal(mix["b"][:25], np.full(25, -1.0))

    def test_explicit_verbose_overrides_config(self, rng):
        t0 = {"a": rng.normal(size=200)}
        with pytest.warns(UserWarning, match="uniform prior odds"):
            weighted_posteriors(
                t0, key=seed(0), verbose=True, config=MixtureConfig(verbose=False)
            )

    def test_no_tables(self):
        with pytest.raises(InvalidArgumentError):
            weighted_posteriors(prior_odds=[])


class TestWeightedPosteriorsFromModels:
    @pytest.fixture
    def null_model(self):
        return PosteriorDraws(
            intercept_only=True, placeholder_parameters=("mu", "sig2", "g")
        )

    @pytest.fixture
    def effect_model(self, rng):
        return PosteriorDraws(
            draws={
                "mu": rng.normal(size=(2, 500)),
                "sig2": rng.gamma(2.0, size=(2, 500)),
                "delta": rng.normal(0.5, 0.1, size=(2, 500)),
            }
        )

    def test_placeholder_for_unsampleable_model(self, null_model, effect_model):
        def probs(models, prior_odds):
            assert prior_odds is None
            return [0.2, 0.8]

        mix = weighted_posteriors_from_models(
            [null_model, effect_model],
            posterior_probabilities=probs,
            model_names=["1", "delta"],
            key=seed(0),
        )
        assert mix.weights["weights"].tolist() == [200, 800]
        assert mix.names == ["mu", "sig2", "g", "delta"]
        assert np.isnan(mix["mu"][:200]).all()
        np.testing.assert_array_equal(mix["delta"][:200], np.zeros(200))
        np.testing.assert_array_equal(mix["g"][200:], np.zeros(800))
        assert not np.isnan(mix["mu"][200:]).any()

    def test_prior_odds_forwarded(self, effect_model):
        seen = {}

        def probs(models, prior_odds):
            seen["odds"] = prior_odds
            return [1.0]

        weighted_posteriors_from_models(
            [effect_model], posterior_probabilities=probs, prior_odds=[2.0], key=seed(0)
        )
        assert seen["odds"] == [2.0]

    def test_explicit_iterations(self, effect_model):
        mix = weighted_posteriors_from_models(
            [effect_model],
            posterior_probabilities=lambda models, odds: [1.0],
            iterations=250,
            key=seed(0),
        )
        assert mix.n_draws == 250

    def test_config_iterations_and_missing(self, null_model, effect_model):
        mix = weighted_posteriors_from_models(
            [null_model, effect_model],
            posterior_probabilities=lambda models, odds: [0.5, 0.5],
            key=seed(0),
            config=MixtureConfig(missing=9.0, iterations=100),
        )
        assert mix.weights["weights"].tolist() == [50, 50]
        np.testing.assert_array_equal(mix["delta"][:50], np.full(50, 9.0))

    def test_unsampleable_without_placeholders(self, effect_model):
        bare = PosteriorDraws(intercept_only=True)
        with pytest.raises(InvalidArgumentError, match="placeholder"):
            weighted_posteriors_from_models(
                [bare, effect_model],
                posterior_probabilities=lambda models, odds: [0.5, 0.5],
            )

    def test_no_sampleable_models_needs_iterations(self, null_model):
        with pytest.raises(InvalidArgumentError, match="iterations"):
            weighted_posteriors_from_models(
                [null_model], posterior_probabilities=lambda models, odds: [1.0]
            )
