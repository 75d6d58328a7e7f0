"""
rope.py
-------

Region of Practical Equivalence (ROPE) overlap.

The ROPE is a caller-defined interval around a null value; values inside
it are treated as practically equivalent to the null (Kruschke 2010, 2011,
2014). The index computed here is the proportion of the credible interval
of a posterior that lies inside the ROPE:

    1. compute the credible interval (HDI or ETI) of the draws,
    2. keep the draws that fall inside that interval,
    3. report the fraction of the kept draws that fall inside the ROPE.

Step 2 is literal filtering of draws, not resampling.

Inputs
------
- a single vector of draws -> one row per level
- a table of draws (one column per parameter) -> one row per
  (parameter, level), parameters treated independently
- a table plus an explicit grouping map (multivariate responses) -> each
  group's parameters use that group's own range

A level whose interval cannot be computed yields NaN for that cell only;
sibling cells are still computed.

References
----------
Kruschke, J. K. (2018). Rejecting or accepting parameter values in Bayesian
estimation. Advances in Methods and Practices in Psychological Science,
1(2), 270-280.
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from ropemix.config import RopeConfig, validate_levels, validate_method
from ropemix.data import ParameterTable, as_parameter_table, normalize_range
from ropemix.errors import DegenerateSampleError, InvalidArgumentError
from ropemix.interval import credible_interval
from ropemix.rope.collinearity import check_multicollinearity
from ropemix.rope.result import BOUNDS_COLUMNS, ROPE_COLUMNS, RopeResult


def _as_percent(level: float) -> float:
    return round(level * 100, 6)


def _rope_cells(
    sample: Any,
    rope: tuple[float, float],
    levels: Sequence[float],
    ci_method: str,
    verbose: bool,
) -> tuple[list[dict], list[dict]]:
    """ROPE rows and interval-bound rows for one vector of draws."""
    x = np.ravel(np.asarray(sample, dtype=np.float64))
    rope_rows, bound_rows = [], []
    for level in levels:
        try:
            ci_low, ci_high = credible_interval(x, level, ci_method, verbose=verbose)
        except DegenerateSampleError as exc:
            if verbose:
                warnings.warn(
                    f"Could not compute the {ci_method} at ci={level}: {exc}",
                    stacklevel=4,
                )
            ci_low = ci_high = percentage = float("nan")
        else:
            ci_area = x[(x >= ci_low) & (x <= ci_high)]
            if ci_area.shape[0] == 0:
                percentage = float("nan")
            else:
                within = (ci_area >= rope[0]) & (ci_area <= rope[1])
                percentage = float(np.count_nonzero(within)) / ci_area.shape[0]

        rope_rows.append(
            {
                "CI": _as_percent(level),
                "ROPE_low": rope[0],
                "ROPE_high": rope[1],
                "ROPE_Percentage": percentage,
            }
        )
        bound_rows.append({"CI": _as_percent(level), "CI_low": ci_low, "CI_high": ci_high})
    return rope_rows, bound_rows


def _rope_table(
    table: ParameterTable,
    rope: tuple[float, float],
    levels: Sequence[float],
    ci_method: str,
    verbose: bool,
) -> tuple[list[dict], list[dict]]:
    rope_rows, bound_rows = [], []
    for name in table.names:
        rows, bounds = _rope_cells(table[name], rope, levels, ci_method, verbose)
        rope_rows.extend({"Parameter": name, **row} for row in rows)
        bound_rows.extend({"Parameter": name, **row} for row in bounds)
    return rope_rows, bound_rows


def _is_table(x: Any) -> bool:
    return isinstance(x, (ParameterTable, pd.DataFrame, Mapping))


def _resolve_range(range_: Any, default: tuple[float, float]) -> tuple[float, float]:
    if isinstance(range_, str):
        if range_ != "default":
            raise InvalidArgumentError(
                f"`range` should be 'default' or a pair of numbers, got {range_!r}"
            )
        return normalize_range(default)
    if isinstance(range_, Mapping):
        raise InvalidArgumentError(
            "A mapping of ranges is only valid together with `groups`"
        )
    return normalize_range(range_)


def _resolve_group_ranges(
    range_: Any,
    groups: Mapping[str, str],
    default: tuple[float, float],
) -> dict[str, tuple[float, float]]:
    """Map every group key to its normalized range, in range-mapping order."""
    wanted = list(dict.fromkeys(groups.values()))
    if isinstance(range_, str) and range_ == "default":
        return {group: normalize_range(default) for group in wanted}
    if not isinstance(range_, Mapping):
        raise InvalidArgumentError(
            "With grouped parameters, `range` should be 'default' or a mapping "
            "of group name -> (low, high)"
        )
    missing = [group for group in wanted if group not in range_]
    if missing:
        raise InvalidArgumentError(f"No ROPE range given for groups: {missing}")
    return {group: normalize_range(bounds) for group, bounds in range_.items()}


def rope_overlap(
    x: Any,
    range: Any = "default",
    ci: float | Sequence[float] | None = None,
    ci_method: str | None = None,
    *,
    groups: Mapping[str, str] | None = None,
    check_collinearity: bool | None = None,
    verbose: bool | None = None,
    config: RopeConfig | None = None,
) -> RopeResult:
    """
    Proportion of the credible interval that lies inside the ROPE.

    Parameters
    ----------
    x : array-like, ParameterTable, DataFrame or mapping of draws
        A 1-D vector of draws, or a table with one column per parameter.
    range : "default", (low, high) or mapping group -> (low, high)
        ROPE bounds, in either order. ``"default"`` uses
        ``config.default_range`` (``(-0.1, 0.1)``). A mapping is only valid
        together with ``groups``.
    ci : float or sequence of float, optional
        Credible interval level(s) in (0, 1). Default 0.89.
    ci_method : {"HDI", "ETI"}, optional
        Interval type. Default "HDI".
    groups : Mapping[str, str], optional
        Parameter name -> group key (e.g. response variable). Every
        parameter of ``x`` must be listed. Each group's parameters are
        evaluated against that group's range only.
    check_collinearity : bool, optional
        Run the advisory pairwise-correlation check on table input.
    verbose : bool, optional
        Warn about degenerate cells and collinear pairs.
    config : RopeConfig, optional
        Defaults for every argument above that is left as None.

    Returns
    -------
    RopeResult

    Raises
    ------
    InvalidArgumentError
        Malformed range, a level outside (0, 1), an unknown method, or an
        incomplete grouping map.

    Examples
    --------
    >>> import numpy as np
    >>> draws = np.random.default_rng(0).normal(0.0, 0.01, 1000)
    >>> float(rope_overlap(draws, range=(-0.1, 0.1)))
    1.0
    """
    config = config or RopeConfig()
    levels = validate_levels(config.ci if ci is None else ci)
    ci_method = validate_method(config.ci_method if ci_method is None else ci_method)
    verbose = config.verbose if verbose is None else verbose
    if check_collinearity is None:
        check_collinearity = config.check_collinearity

    if not _is_table(x):
        if groups is not None:
            raise InvalidArgumentError("`groups` requires a table of parameters")
        if np.ndim(x) != 1:
            raise InvalidArgumentError(
                f"Expected a 1-D vector of draws or a table, got shape {np.shape(x)}"
            )
        rope = _resolve_range(range, config.default_range)
        rope_rows, bound_rows = _rope_cells(x, rope, levels, ci_method, verbose)
        return RopeResult(
            table=pd.DataFrame(rope_rows, columns=ROPE_COLUMNS),
            ci_bounds=pd.DataFrame(bound_rows, columns=BOUNDS_COLUMNS),
            ci_method=ci_method,
        )

    table = as_parameter_table(x)
    if check_collinearity:
        check_multicollinearity(
            table, config.collinearity_threshold, verbose=verbose
        )

    if groups is None:
        rope = _resolve_range(range, config.default_range)
        rope_rows, bound_rows = _rope_table(table, rope, levels, ci_method, verbose)
    else:
        unassigned = [name for name in table.names if name not in groups]
        if unassigned:
            raise InvalidArgumentError(
                f"Parameters missing from `groups`: {unassigned}"
            )
        ranges = _resolve_group_ranges(range, groups, config.default_range)
        rope_rows, bound_rows = [], []
        for group, rope in ranges.items():
            members = [name for name in table.names if groups[name] == group]
            if not members:
                continue
            rows, bounds = _rope_table(
                table.subset(members), rope, levels, ci_method, verbose
            )
            rope_rows.extend(rows)
            bound_rows.extend(bounds)

    return RopeResult(
        table=pd.DataFrame(rope_rows, columns=["Parameter", *ROPE_COLUMNS]),
        ci_bounds=pd.DataFrame(bound_rows, columns=["Parameter", *BOUNDS_COLUMNS]),
        ci_method=ci_method,
    )
