"""
ci.py
-----

Credible interval primitives.

Provides the bounds the ROPE engine restricts draws to:
- hdi : Highest-Density Interval (narrowest window holding ``ci`` mass)
- eti : Equal-Tailed Interval (``(1 - ci) / 2`` cut from each tail)
- credible_interval : dispatch on ``method``

All three raise DegenerateSampleError when no interval can be formed;
callers that process many samples recover it per sample.

Examples
--------
>>> import numpy as np
>>> from ropemix.interval import credible_interval
>>> x = np.linspace(-1.0, 1.0, 201)
>>> low, high = credible_interval(x, 0.9, method="ETI")
"""

from __future__ import annotations

import math
import warnings
from typing import Any

import numpy as np

from ropemix.config import validate_levels, validate_method
from ropemix.errors import DegenerateSampleError


def _prepare(sample: Any) -> np.ndarray:
    """Flatten ``sample`` to 1-D and reject samples no interval can bound."""
    x = np.ravel(np.asarray(sample, dtype=np.float64))
    if x.shape[0] == 0:
        raise DegenerateSampleError("Sample is empty")
    if x.shape[0] < 3:
        raise DegenerateSampleError(
            f"At least 3 draws are needed to compute an interval, got {x.shape[0]}"
        )
    if not np.all(np.isfinite(x)):
        raise DegenerateSampleError("Sample contains missing or infinite values")
    if x.min() == x.max():
        raise DegenerateSampleError("Sample is constant")
    return x


def hdi(sample: Any, ci: float = 0.95, *, verbose: bool = True) -> tuple[float, float]:
    """
    Highest-Density Interval of a sample.

    Slides a window of ``ceil(ci * n)`` sorted draws along the sample and
    keeps the narrowest one.

    Parameters
    ----------
    sample : array-like, shape (n,)
        Posterior draws of one parameter.
    ci : float, default=0.95
        Probability mass of the interval, in (0, 1).
    verbose : bool, default=True
        Warn when equally narrow windows sit on separate segments.

    Returns
    -------
    (low, high) : tuple of float

    Raises
    ------
    DegenerateSampleError
        If the sample is empty, too short, constant, contains non-finite
        values, or ``ci`` leaves no room for a window.

    Notes
    -----
    Ties between adjacent windows resolve to the middle one (floor of the
    mean index). Ties on separate segments resolve to the rightmost.
    """
    (ci,) = validate_levels(ci)
    x_sorted = np.sort(_prepare(sample))
    n = x_sorted.shape[0]

    window = math.ceil(ci * n)
    if window < 2:
        raise DegenerateSampleError(
            f"`ci` is too small or the sample too short to estimate the HDI (window={window})"
        )
    n_windows = n - window
    if n_windows < 1:
        raise DegenerateSampleError(
            f"`ci` is too large or the sample too short to estimate the HDI (n={n}, window={window})"
        )

    widths = x_sorted[window:] - x_sorted[:n_windows]
    candidates = np.flatnonzero(widths == widths.min())
    if len(candidates) > 1:
        if np.any(np.diff(candidates) != 1):
            if verbose:
                warnings.warn(
                    "Identical densities found along different segments of the "
                    "distribution, choosing rightmost.",
                    stacklevel=2,
                )
            i = int(candidates.max())
        else:
            i = int(np.floor(candidates.mean()))
    else:
        i = int(candidates[0])

    return float(x_sorted[i]), float(x_sorted[i + window])


def eti(sample: Any, ci: float = 0.95) -> tuple[float, float]:
    """
    Equal-Tailed Interval of a sample.

    Parameters
    ----------
    sample : array-like, shape (n,)
        Posterior draws of one parameter.
    ci : float, default=0.95
        Probability mass of the interval, in (0, 1).

    Returns
    -------
    (low, high) : tuple of float
        Linear-interpolation quantiles at ``(1 - ci) / 2`` and ``(1 + ci) / 2``.
    """
    (ci,) = validate_levels(ci)
    x = _prepare(sample)
    probs = [(1.0 - ci) / 2.0, (1.0 + ci) / 2.0]
    low, high = np.quantile(x, probs)
    return float(low), float(high)


def credible_interval(
    sample: Any,
    ci: float = 0.95,
    method: str = "HDI",
    *,
    verbose: bool = True,
) -> tuple[float, float]:
    """
    Credible interval of a sample by ``method``.

    Parameters
    ----------
    sample : array-like, shape (n,)
    ci : float, default=0.95
    method : {"HDI", "ETI"}, default="HDI"
        Case-insensitive.
    verbose : bool, default=True
        Forwarded to :func:`hdi`.

    Returns
    -------
    (low, high) : tuple of float

    Raises
    ------
    InvalidArgumentError
        Unknown method or ``ci`` outside (0, 1).
    DegenerateSampleError
        No interval can be formed for this sample.
    """
    method = validate_method(method)
    if method == "HDI":
        return hdi(sample, ci, verbose=verbose)
    return eti(sample, ci)
