"""
base.py
-------

Adapter interface and type registry for fitted-model representations.

The ROPE and mixture engines only ever see ParameterTables. Everything
that knows about a particular model representation lives behind a
PosteriorAdapter, selected by the model's type:

    adapter = get_adapter(model)
    table = adapter.extract(model, effects="fixed", component="conditional")

Adding support for a new representation means subclassing
PosteriorAdapter and calling :func:`register_adapter`; the engines do not
change.

Capabilities beyond ``extract`` are optional. The defaults describe a
representation that can always be sampled, has no grouping, no collinearity
diagnostic and no default ROPE range.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ropemix.data import ParameterTable
from ropemix.errors import InvalidArgumentError

EFFECTS = ("fixed", "random", "all")
COMPONENTS = {
    "conditional": {"conditional"},
    "zi": {"zi"},
    "zero_inflated": {"zi"},
    "location": {"conditional", "zi", "smooth_terms"},
    "smooth_terms": {"smooth_terms"},
    "sigma": {"sigma"},
    "distributional": {"sigma", "distributional", "auxiliary"},
    "auxiliary": {"sigma", "distributional", "auxiliary"},
    "all": None,
}


def validate_effects(effects: str) -> str:
    if effects not in EFFECTS:
        raise InvalidArgumentError(
            f"Unknown effects: {effects!r}. Use one of {list(EFFECTS)}."
        )
    return effects


def component_members(component: str) -> set[str] | None:
    """Component labels selected by ``component`` (None selects every label)."""
    if component not in COMPONENTS:
        raise InvalidArgumentError(
            f"Unknown component: {component!r}. Use one of {list(COMPONENTS)}."
        )
    return COMPONENTS[component]


def filter_names(names: Sequence[str], parameters: Sequence[str] | str | None) -> list[str]:
    """Keep the names matching any of the regular expressions in ``parameters``."""
    if parameters is None:
        return list(names)
    patterns = [parameters] if isinstance(parameters, str) else list(parameters)
    compiled = [re.compile(p) for p in patterns]
    return [name for name in names if any(p.search(name) for p in compiled)]


class PosteriorAdapter(ABC):
    """
    Converts one kind of fitted-model object into a ParameterTable.

    Subclasses must implement:
    - extract(model, effects, component, parameters)

    Subclasses may override the optional capabilities:
    - default_range(model)
    - groups(model, names)
    - collinearity_flag(model)
    - can_sample(model)
    - placeholder_parameters(model)
    """

    @abstractmethod
    def extract(
        self,
        model: Any,
        effects: str = "fixed",
        component: str = "conditional",
        parameters: Sequence[str] | str | None = None,
    ) -> ParameterTable:
        """Return posterior draws aligned by row across all parameters."""

    def default_range(self, model: Any):
        """Default ROPE range, or a mapping response -> range."""
        raise InvalidArgumentError(
            f"No default ROPE range is available for {type(model).__name__}; "
            "pass `range` explicitly."
        )

    def groups(self, model: Any, names: Sequence[str]) -> dict[str, str] | None:
        """Parameter name -> response variable for multivariate models."""
        return None

    def collinearity_flag(self, model: Any) -> bool | None:
        """Advisory collinearity diagnostic, or None when not available."""
        return None

    def can_sample(self, model: Any) -> bool:
        """Whether posterior draws can be obtained from ``model``."""
        return True

    def placeholder_parameters(self, model: Any) -> tuple[str, ...]:
        """Column names for the stand-in table of a model that cannot be sampled."""
        return ()


_REGISTRY: dict[type, PosteriorAdapter] = {}


def register_adapter(model_type: type, adapter: PosteriorAdapter) -> None:
    """
    Register ``adapter`` for objects of ``model_type``.

    A later registration for the same type replaces the earlier one.
    """
    if not isinstance(adapter, PosteriorAdapter):
        raise TypeError(
            f"adapter must be a PosteriorAdapter, got {type(adapter).__name__}"
        )
    _REGISTRY[model_type] = adapter


def get_adapter(model: Any) -> PosteriorAdapter:
    """
    Look up the adapter for ``model``.

    Concrete classes in the model's MRO are matched first, then abstract
    types (e.g. ``collections.abc.Mapping``) via ``isinstance``.

    Raises
    ------
    InvalidArgumentError
        If no adapter is registered for the model's type.
    """
    for cls in type(model).__mro__:
        if cls in _REGISTRY:
            return _REGISTRY[cls]
    for cls, adapter in _REGISTRY.items():
        if isinstance(model, cls):
            return adapter
    raise InvalidArgumentError(
        f"No posterior adapter registered for {type(model).__name__}"
    )


def extract_parameters(
    model: Any,
    effects: str = "fixed",
    component: str = "conditional",
    parameters: Sequence[str] | str | None = None,
) -> ParameterTable:
    """
    Posterior draws of ``model`` as a ParameterTable.

    Parameters
    ----------
    model : Any
        Any object with a registered adapter.
    effects : {"fixed", "random", "all"}, default="fixed"
    component : str, default="conditional"
        One of ``conditional``, ``zi``, ``zero_inflated``, ``location``,
        ``smooth_terms``, ``sigma``, ``distributional``, ``auxiliary``,
        ``all``.
    parameters : str or sequence of str, optional
        Regular expressions; only matching parameter names are kept.
    """
    validate_effects(effects)
    component_members(component)
    return get_adapter(model).extract(
        model, effects=effects, component=component, parameters=parameters
    )
