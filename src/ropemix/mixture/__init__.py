"""
mixture
=======

Posterior draws mixed across candidate models.

This subpackage provides:
- weighted_mixture: core engine (tables + weights + target draw count)
- weighted_posteriors: tables weighted by prior odds against the first
- weighted_posteriors_from_models: fitted models weighted by externally
  computed posterior model probabilities
- normalize_weights / allocate_draws / weights_from_prior_odds
- MixtureResult: result container
"""

from .result import MixtureResult
from .weighted import (
    weighted_mixture,
    weighted_posteriors,
    weighted_posteriors_from_models,
)
from .weights import allocate_draws, normalize_weights, weights_from_prior_odds

__all__ = [
    "MixtureResult",
    "allocate_draws",
    "normalize_weights",
    "weighted_mixture",
    "weighted_posteriors",
    "weighted_posteriors_from_models",
    "weights_from_prior_odds",
]
