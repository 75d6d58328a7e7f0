"""
draws.py
--------

PosteriorDraws: a light container for the draws of a fitted model, and the
adapters for it and for plain tables.

PosteriorDraws carries the metadata the engines need from a fitted model
without depending on any particular modelling library:

- which parameters are fixed or random effects,
- which model component each parameter belongs to,
- which response variable each parameter belongs to (multivariate models),
- an optional default ROPE range,
- whether the model can be sampled at all (intercept-only models).

Examples
--------
>>> import numpy as np
>>> rng = np.random.default_rng(0)
>>> fit = PosteriorDraws(
...     draws={"b_Intercept": rng.normal(size=(2, 500)),
...            "b_x": rng.normal(size=(2, 500)),
...            "sd_group": rng.gamma(2.0, size=(2, 500))},
...     effects={"sd_group": "random"},
...     rope_range=(-0.05, 0.05),
... )
>>> fit.n_draws
1000
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from ropemix.adapters.base import (
    PosteriorAdapter,
    component_members,
    filter_names,
    validate_effects,
)
from ropemix.data import ParameterTable, as_parameter_table, normalize_range
from ropemix.errors import InvalidArgumentError
from ropemix.rope.collinearity import check_multicollinearity


@dataclass
class PosteriorDraws:
    """
    Draws of a fitted model plus per-parameter metadata.

    Attributes
    ----------
    draws : Mapping[str, array-like]
        Parameter name -> draws, shape (n_draws,) or (n_chains, n_draws).
        Chains are concatenated in order.
    effects : Mapping[str, str]
        Parameter name -> "fixed" or "random". Unlisted names are fixed.
    components : Mapping[str, str]
        Parameter name -> component label (e.g. "conditional", "zi",
        "sigma"). Unlisted names are "conditional".
    responses : Mapping[str, str]
        Parameter name -> response variable, for multivariate models.
    rope_range : (low, high) or Mapping[str, (low, high)], optional
        Default ROPE range; a mapping keyed by response when multivariate.
    intercept_only : bool
        True for a model with no sampled parameters (e.g. an intercept-only
        comparison model). Such models are replaced by placeholder columns
        when mixing.
    placeholder_parameters : tuple of str
        Column names used for the placeholder table of an intercept-only
        model.
    """

    draws: Mapping[str, Any] = field(default_factory=dict)
    effects: Mapping[str, str] = field(default_factory=dict)
    components: Mapping[str, str] = field(default_factory=dict)
    responses: Mapping[str, str] = field(default_factory=dict)
    rope_range: Any = None
    intercept_only: bool = False
    placeholder_parameters: tuple[str, ...] = ()

    def __post_init__(self):
        """Validate draw shapes and metadata."""
        for name, values in self.draws.items():
            if np.ndim(values) not in (1, 2):
                raise InvalidArgumentError(
                    f"Draws for {name!r} must have shape (n_draws,) or "
                    f"(n_chains, n_draws), got {np.shape(values)}"
                )
        for name, kind in self.effects.items():
            if kind not in ("fixed", "random"):
                raise InvalidArgumentError(
                    f"Effect type for {name!r} must be 'fixed' or 'random', got {kind!r}"
                )

    @property
    def is_multivariate(self) -> bool:
        return len(set(self.responses.values())) > 1

    @property
    def n_draws(self) -> int:
        """Total post-warmup draws across chains."""
        return self.table().n_draws

    def table(self) -> ParameterTable:
        """All parameters as one ParameterTable, chains concatenated."""
        return ParameterTable(
            {name: np.ravel(np.asarray(values)) for name, values in self.draws.items()}
        )


class PosteriorDrawsAdapter(PosteriorAdapter):
    """Adapter for :class:`PosteriorDraws`."""

    def extract(
        self,
        model: PosteriorDraws,
        effects: str = "fixed",
        component: str = "conditional",
        parameters: Sequence[str] | str | None = None,
    ) -> ParameterTable:
        validate_effects(effects)
        members = component_members(component)
        table = model.table()
        names = [
            name
            for name in table.names
            if (effects == "all" or model.effects.get(name, "fixed") == effects)
            and (members is None or model.components.get(name, "conditional") in members)
        ]
        return table.subset(filter_names(names, parameters))

    def default_range(self, model: PosteriorDraws):
        if model.rope_range is None:
            return super().default_range(model)
        if isinstance(model.rope_range, Mapping):
            return {resp: normalize_range(r) for resp, r in model.rope_range.items()}
        return normalize_range(model.rope_range)

    def groups(self, model: PosteriorDraws, names: Sequence[str]) -> dict[str, str] | None:
        if not model.is_multivariate:
            return None
        unassigned = [name for name in names if name not in model.responses]
        if unassigned:
            raise InvalidArgumentError(
                f"Multivariate model has parameters without a response: {unassigned}"
            )
        return {name: model.responses[name] for name in names}

    def collinearity_flag(self, model: PosteriorDraws) -> bool:
        fixed = self.extract(model, effects="fixed", component="conditional")
        return len(check_multicollinearity(fixed, verbose=True)) > 0

    def can_sample(self, model: PosteriorDraws) -> bool:
        return not model.intercept_only

    def placeholder_parameters(self, model: PosteriorDraws) -> tuple[str, ...]:
        return tuple(model.placeholder_parameters)


class TableAdapter(PosteriorAdapter):
    """
    Adapter for ParameterTables, DataFrames and mappings of draws.

    Plain tables carry no effect or component metadata, so every column is
    treated as a fixed, conditional parameter. Only ``parameters`` filters.
    """

    def extract(
        self,
        model: ParameterTable | pd.DataFrame | Mapping,
        effects: str = "fixed",
        component: str = "conditional",
        parameters: Sequence[str] | str | None = None,
    ) -> ParameterTable:
        validate_effects(effects)
        component_members(component)
        table = as_parameter_table(model)
        return table.subset(filter_names(table.names, parameters))
