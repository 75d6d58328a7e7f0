"""
weights.py
----------

Model weights and per-model draw allocation.

- normalize_weights : non-negative weights -> probability simplex
- allocate_draws : round(total * p_i) draws per model
- weights_from_prior_odds : odds against the first model -> weights

Notes
-----
Allocation rounds each model independently (round half to even) and does
not rebalance. The allocated counts can therefore sum to slightly more or
less than the requested total; this is a known small-sample discrepancy.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ropemix.errors import InvalidArgumentError


def normalize_weights(weights: Sequence[float]) -> np.ndarray:
    """
    Normalize model weights to sum to one.

    Raises
    ------
    InvalidArgumentError
        If no weight is given, any weight is negative or non-finite, or the
        weights sum to zero.
    """
    w = np.asarray(weights, dtype=float).ravel()
    if w.size == 0:
        raise InvalidArgumentError("At least one model weight is required")
    if not np.all(np.isfinite(w)):
        raise InvalidArgumentError(f"Model weights must be finite, got {w.tolist()}")
    if np.any(w < 0):
        raise InvalidArgumentError(f"Model weights must be non-negative, got {w.tolist()}")
    total = w.sum()
    if total <= 0:
        raise InvalidArgumentError("Model weights sum to zero; nothing to combine")
    return w / total


def allocate_draws(total: int, probabilities: Sequence[float]) -> np.ndarray:
    """
    Number of draws each model contributes: ``round(total * p_i)``.

    Parameters
    ----------
    total : int
        Requested number of mixture draws.
    probabilities : sequence of float
        Normalized model probabilities.

    Returns
    -------
    np.ndarray of int
    """
    if int(total) != total or total <= 0:
        raise InvalidArgumentError(f"Number of draws must be a positive integer, got {total}")
    p = np.asarray(probabilities, dtype=float)
    return np.round(int(total) * p).astype(int)


def weights_from_prior_odds(prior_odds: Sequence[float] | float, n_models: int) -> np.ndarray:
    """
    Weights ``[1, *prior_odds]`` from odds of models 2..k against model 1.

    Raises
    ------
    InvalidArgumentError
        If the number of odds is not ``n_models - 1``.
    """
    odds = np.atleast_1d(np.asarray(prior_odds, dtype=float))
    if odds.size != n_models - 1:
        raise InvalidArgumentError(
            f"Expected {n_models - 1} prior odds (models 2..{n_models} against model 1), "
            f"got {odds.size}"
        )
    return np.concatenate([[1.0], odds])
