"""
config.py
---------

Default settings for the ROPE and mixture engines.

Both engines accept an optional ``config=`` argument. Keyword arguments
passed explicitly to an engine always win over the config values.

Examples
--------
>>> from ropemix.config import RopeConfig
>>> cfg = RopeConfig(ci=(0.90, 0.95), ci_method="eti")
>>> cfg.levels
(0.9, 0.95)
>>> cfg.ci_method
'ETI'
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ropemix.data.table import normalize_range
from ropemix.errors import InvalidArgumentError

CI_METHODS = ("HDI", "ETI")
DEFAULT_RANGE = (-0.1, 0.1)


def validate_levels(ci: float | Sequence[float]) -> tuple[float, ...]:
    """
    Coerce ``ci`` to a tuple of floats and check each lies in (0, 1).

    Raises
    ------
    InvalidArgumentError
        If no level is given, a level is not numeric, or a level falls
        outside the open interval (0, 1).
    """
    levels = (ci,) if np.ndim(ci) == 0 else tuple(np.ravel(ci))
    if not levels:
        raise InvalidArgumentError("At least one confidence level is required")
    out = []
    for level in levels:
        try:
            level = float(level)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(
                f"Confidence level must be numeric, got {level!r}"
            ) from exc
        if not 0.0 < level < 1.0:
            raise InvalidArgumentError(
                f"Confidence level must lie in (0, 1), got {level}"
            )
        out.append(level)
    return tuple(out)


def validate_method(ci_method: str) -> str:
    """Return ``ci_method`` upper-cased, or raise if it is not HDI/ETI."""
    method = str(ci_method).upper()
    if method not in CI_METHODS:
        raise InvalidArgumentError(
            f"Unknown ci_method: {ci_method!r}. Use 'HDI' or 'ETI'."
        )
    return method


@dataclass
class RopeConfig:
    """
    Settings for :func:`ropemix.rope.rope_overlap`.

    Attributes
    ----------
    ci : float or sequence of float
        Credible interval level(s), each in (0, 1).
    ci_method : {"HDI", "ETI"}
        Interval type. Case-insensitive; stored upper-case.
    default_range : tuple of float
        Range used when ``range="default"`` is requested for raw draws.
        Stored as ``(min, max)``.
    check_collinearity : bool
        Run the pairwise correlation check on table inputs.
    collinearity_threshold : float
        Absolute correlation above which a pair is flagged.
    verbose : bool
        Emit warnings for degenerate cells and collinear pairs.
    """

    ci: float | Sequence[float] = 0.89
    ci_method: str = "HDI"
    default_range: tuple[float, float] = DEFAULT_RANGE
    check_collinearity: bool = False
    collinearity_threshold: float = 0.7
    verbose: bool = True

    def __post_init__(self):
        """Validate configuration."""
        validate_levels(self.ci)
        self.ci_method = validate_method(self.ci_method)
        self.default_range = normalize_range(self.default_range)
        if not 0.0 < self.collinearity_threshold < 1.0:
            raise InvalidArgumentError(
                "collinearity_threshold must lie in (0, 1), "
                f"got {self.collinearity_threshold}"
            )

    @property
    def levels(self) -> tuple[float, ...]:
        return validate_levels(self.ci)


@dataclass
class MixtureConfig:
    """
    Settings for :func:`ropemix.mixture.weighted_mixture` and its
    ``weighted_posteriors`` front-ends.

    Attributes
    ----------
    missing : float
        Fill value for parameters a model does not estimate.
    iterations : int | None
        Total number of mixture draws. None uses the smallest input table.
    verbose : bool
        Warn when :func:`ropemix.mixture.weighted_posteriors` falls back to
        uniform prior odds.
    """

    missing: float = 0.0
    iterations: int | None = None
    verbose: bool = True

    def __post_init__(self):
        """Validate configuration."""
        if self.iterations is not None and self.iterations <= 0:
            raise InvalidArgumentError(
                f"iterations must be positive, got {self.iterations}"
            )
