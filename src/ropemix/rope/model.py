"""
model.py
--------

ROPE for fitted-model objects.

Dispatches through the adapter registry: the adapter extracts the draws,
supplies the default range and, for multivariate models, the grouping of
parameters by response. The numbers themselves always come from
:func:`ropemix.rope.rope_overlap`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from ropemix.adapters.base import extract_parameters, get_adapter
from ropemix.config import RopeConfig
from ropemix.data import ParameterTable
from ropemix.rope.result import RopeResult
from ropemix.rope.rope import rope_overlap


def _is_raw(x: Any) -> bool:
    return isinstance(x, (ParameterTable, pd.DataFrame, Mapping)) or np.ndim(x) == 1


def rope_range(x: Any, config: RopeConfig | None = None):
    """
    Default ROPE range for ``x``.

    Raw draws (vectors and tables) get ``config.default_range``, i.e.
    ``(-0.1, 0.1)``, a negligible standardized effect (Cohen, 1988). For
    model objects the adapter's ``default_range`` is used, which may be a
    mapping response -> range for multivariate models.
    """
    config = config or RopeConfig()
    if _is_raw(x):
        low, high = config.default_range
        return min(low, high), max(low, high)
    return get_adapter(x).default_range(x)


def rope_model(
    model: Any,
    range: Any = "default",
    ci: float | Sequence[float] | None = None,
    ci_method: str | None = None,
    *,
    effects: str = "fixed",
    component: str = "conditional",
    parameters: Sequence[str] | str | None = None,
    verbose: bool | None = None,
    config: RopeConfig | None = None,
) -> RopeResult:
    """
    ROPE percentages for the parameters of a fitted model.

    Parameters
    ----------
    model : Any
        Object with a registered adapter (see :mod:`ropemix.adapters`).
    range : "default", (low, high) or mapping response -> (low, high)
        ``"default"`` asks the adapter for the model's default range.
        Multivariate models need a mapping keyed by response.
    ci, ci_method, verbose, config
        As in :func:`rope_overlap`.
    effects, component, parameters
        Forwarded to :func:`ropemix.adapters.extract_parameters`.

    Returns
    -------
    RopeResult

    Notes
    -----
    When ``verbose``, the adapter's collinearity diagnostic runs first. It
    can only warn.
    """
    config = config or RopeConfig()
    verbose = config.verbose if verbose is None else verbose
    adapter = get_adapter(model)

    if isinstance(range, str) and range == "default":
        range = adapter.default_range(model)
    if verbose:
        adapter.collinearity_flag(model)

    table = extract_parameters(
        model, effects=effects, component=component, parameters=parameters
    )
    groups = adapter.groups(model, table.names)
    return rope_overlap(
        table,
        range=range,
        ci=ci,
        ci_method=ci_method,
        groups=groups,
        check_collinearity=False,
        verbose=verbose,
        config=config,
    )
