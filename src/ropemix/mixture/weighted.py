"""
weighted.py
-----------

Posterior draws mixed across models, weighted by model probability.

Each model contributes ``round(n * p_i)`` of its own draws, picked
uniformly at random without replacement. Parameters a model does not
estimate are filled with ``missing`` (0 by default: an absent effect is an
effect of zero). The blocks are stacked in model order.

Three entry points:
- weighted_mixture : tables + explicit weights (the core engine)
- weighted_posteriors : tables + prior odds against the first table
- weighted_posteriors_from_models : fitted models + an external source of
  posterior model probabilities

Notes
-----
Across models a parameter may play different roles (a main effect in
``y ~ a + b`` is a simple effect in ``y ~ a + b + a:b``). Centering
predictors reduces the issue but the mixture does not detect it.

Examples
--------
>>> import numpy as np
>>> from ropemix.utils.rng import seed
>>> rng = np.random.default_rng(1)
>>> m0 = {"a": rng.normal(size=400)}
>>> m1 = {"a": rng.normal(size=400), "b": rng.normal(size=400)}
>>> mix = weighted_mixture([m0, m1], [0.75, 0.25], 100, key=seed(0))
>>> mix.weights["weights"].tolist()
[75, 25]

References
----------
Hinne, M., Gronau, Q. F., van den Bergh, D., & Wagenmakers, E.-J. (2019).
A conceptual introduction to Bayesian Model Averaging.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable, Sequence
from typing import Any

import jax.random as jr
import numpy as np
import pandas as pd

from ropemix.adapters.base import extract_parameters, get_adapter
from ropemix.config import MixtureConfig
from ropemix.data import ParameterTable, as_parameter_table
from ropemix.errors import InsufficientSamplesError, InvalidArgumentError
from ropemix.mixture.result import MixtureResult
from ropemix.mixture.weights import (
    allocate_draws,
    normalize_weights,
    weights_from_prior_odds,
)
from ropemix.utils.rng import default_key, split


def _model_labels(n_models: int, model_names: Sequence[str] | None) -> list[str]:
    if model_names is None:
        return [f"Model {i + 1}" for i in range(n_models)]
    labels = [str(name) for name in model_names]
    if len(labels) != n_models:
        raise InvalidArgumentError(
            f"Got {len(labels)} model names for {n_models} models"
        )
    return labels


def weighted_mixture(
    model_tables: Sequence[Any],
    weights: Sequence[float],
    target_rows: int | None = None,
    missing: float | None = None,
    *,
    model_names: Sequence[str] | None = None,
    key: Any | None = None,
    config: MixtureConfig | None = None,
) -> MixtureResult:
    """
    Mix posterior draws of several models in proportion to their weights.

    Parameters
    ----------
    model_tables : sequence of ParameterTable, DataFrame or mapping
        Draws of each candidate model.
    weights : sequence of float
        Non-negative model weights (e.g. posterior model probabilities);
        normalized internally.
    target_rows : int, optional
        Requested number of mixture draws. Defaults to
        ``config.iterations``, or the smallest table when that is None.
    missing : float, optional
        Fill value for parameters absent from a model. Default 0.
    model_names : sequence of str, optional
        Labels for the weights table. Default "Model 1", "Model 2", ...
    key : jax.Array, optional
        PRNG key. A time-seeded key is used when omitted, so results are
        only reproducible when a key is passed.
    config : MixtureConfig, optional

    Returns
    -------
    MixtureResult

    Raises
    ------
    InvalidArgumentError
        Empty model list, weights/model count mismatch, negative weights or
        zero total weight.
    InsufficientSamplesError
        A model is allocated more draws than it holds.

    Notes
    -----
    - Models allocated zero draws are dropped before the column union is
      formed; they still appear in the weights table.
    - Allocated counts are rounded independently and not rebalanced, so
      the result may hold slightly more or fewer than ``target_rows`` draws.
    """
    config = config or MixtureConfig()
    missing = config.missing if missing is None else float(missing)

    tables = [as_parameter_table(t) for t in model_tables]
    if not tables:
        raise InvalidArgumentError("No models to combine")
    if len(weights) != len(tables):
        raise InvalidArgumentError(
            f"Got {len(weights)} weights for {len(tables)} models"
        )
    labels = _model_labels(len(tables), model_names)
    probs = normalize_weights(weights)

    if target_rows is None:
        target_rows = config.iterations or min(t.n_draws for t in tables)
    counts = allocate_draws(target_rows, probs)

    for label, table, n in zip(labels, tables, counts):
        if n > table.n_draws:
            raise InsufficientSamplesError(
                f"{label} is allocated {n} draws but only has {table.n_draws}"
            )

    contributing = [(i, table, int(n)) for i, (table, n) in enumerate(zip(tables, counts)) if n > 0]
    par_names = list(dict.fromkeys(name for _, table, _ in contributing for name in table.names))

    keys = split(default_key(key), len(tables))
    blocks = []
    for i, table, n in contributing:
        rows = jr.choice(keys[i], table.n_draws, shape=(n,), replace=False)
        picked = table.select(np.asarray(rows))
        blocks.append(
            {
                name: picked[name] if name in picked else np.full(n, missing, dtype=float)
                for name in par_names
            }
        )

    samples = ParameterTable(
        {name: np.concatenate([block[name] for block in blocks]) for name in par_names}
    )
    return MixtureResult(
        samples=samples,
        weights=pd.DataFrame({"Model": labels, "weights": counts.astype(int)}),
    )


def weighted_posteriors(
    *tables: Any,
    prior_odds: Sequence[float] | float | None = None,
    missing: float | None = None,
    model_names: Sequence[str] | None = None,
    key: Any | None = None,
    verbose: bool | None = None,
    config: MixtureConfig | None = None,
) -> MixtureResult:
    """
    Mix tables of draws weighted by prior odds against the first table.

    Parameters
    ----------
    *tables : ParameterTable, DataFrame or mapping
        Draws of each model (e.g. posterior predictions).
    prior_odds : float or sequence of float, optional
        Odds of tables 2..k against table 1 (e.g. Bayes factors against the
        first model). Uniform odds are used, with a warning, when omitted.
    missing, model_names, key, config
        As in :func:`weighted_mixture`.
    verbose : bool, optional
        Warn when falling back to uniform odds. Defaults to
        ``config.verbose``.

    Returns
    -------
    MixtureResult
        Sized by ``config.iterations``, or the smallest table when that is
        None.
    """
    config = config or MixtureConfig()
    verbose = config.verbose if verbose is None else verbose
    if not tables:
        raise InvalidArgumentError("No models to combine")
    if prior_odds is None:
        if verbose:
            warnings.warn(
                "prior_odds=None; using uniform prior odds. For tables of draws, "
                "prior_odds should be given as a sequence of numbers.",
                stacklevel=2,
            )
        weights = np.ones(len(tables))
    else:
        weights = weights_from_prior_odds(prior_odds, len(tables))

    return weighted_mixture(
        tables,
        weights,
        target_rows=None,
        missing=missing,
        model_names=model_names,
        key=key,
        config=config,
    )


def weighted_posteriors_from_models(
    models: Sequence[Any],
    *,
    posterior_probabilities: Callable[[Sequence[Any], Any], Sequence[float]],
    prior_odds: Sequence[float] | None = None,
    iterations: int | None = None,
    missing: float | None = None,
    effects: str = "fixed",
    component: str = "conditional",
    parameters: Sequence[str] | str | None = None,
    model_names: Sequence[str] | None = None,
    key: Any | None = None,
    config: MixtureConfig | None = None,
) -> MixtureResult:
    """
    Mix the draws of fitted models by their posterior model probabilities.

    Parameters
    ----------
    models : sequence
        Fitted models, each with a registered adapter, all fit to the same
        data.
    posterior_probabilities : callable
        ``posterior_probabilities(models, prior_odds)`` returns one weight
        per model, typically from a Bayes-factor comparison.
    prior_odds : sequence of float, optional
        Forwarded to ``posterior_probabilities``.
    iterations : int, optional
        Number of mixture draws. Defaults to ``config.iterations``, or the
        smallest extracted table when that is None.
    missing, model_names, key, config
        As in :func:`weighted_mixture`.
    effects, component, parameters
        Forwarded to :func:`ropemix.adapters.extract_parameters`.

    Returns
    -------
    MixtureResult

    Notes
    -----
    A model whose adapter reports ``can_sample(model) == False`` (e.g. an
    intercept-only comparison model) contributes a placeholder block: the
    adapter's ``placeholder_parameters`` filled with NaN. Its probability
    mass is kept so the other models are not over-weighted.
    """
    config = config or MixtureConfig()
    if iterations is None:
        iterations = config.iterations
    models = list(models)
    if not models:
        raise InvalidArgumentError("No models to combine")
    weights = posterior_probabilities(models, prior_odds)

    tables: list[ParameterTable | None] = []
    for model in models:
        adapter = get_adapter(model)
        if adapter.can_sample(model):
            tables.append(
                extract_parameters(
                    model, effects=effects, component=component, parameters=parameters
                )
            )
        else:
            tables.append(None)

    if iterations is None:
        sampled = [t.n_draws for t in tables if t is not None]
        if not sampled:
            raise InvalidArgumentError(
                "None of the models can be sampled; pass `iterations` explicitly"
            )
        iterations = min(sampled)

    for i, model in enumerate(models):
        if tables[i] is not None:
            continue
        names = get_adapter(model).placeholder_parameters(model)
        if not names:
            raise InvalidArgumentError(
                f"{type(model).__name__} at position {i} cannot be sampled and "
                "declares no placeholder parameters"
            )
        tables[i] = ParameterTable({name: np.full(iterations, np.nan) for name in names})

    return weighted_mixture(
        tables,
        weights,
        target_rows=iterations,
        missing=missing,
        model_names=model_names,
        key=key,
        config=config,
    )
