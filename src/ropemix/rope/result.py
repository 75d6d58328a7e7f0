"""
result.py
---------

Result container for the ROPE engine.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

ROPE_COLUMNS = ["CI", "ROPE_low", "ROPE_high", "ROPE_Percentage"]
BOUNDS_COLUMNS = ["CI", "CI_low", "CI_high"]


@dataclass(frozen=True, eq=False)
class RopeResult:
    """
    Percentage of credible-interval draws inside a ROPE.

    Attributes
    ----------
    table : pd.DataFrame
        One row per (parameter, level). Columns ``Parameter`` (table input
        only), ``CI`` (level as a percentage), ``ROPE_low``, ``ROPE_high``
        and ``ROPE_Percentage`` (fraction in [0, 1], NaN when the interval
        could not be computed).
    ci_bounds : pd.DataFrame
        Realized interval bounds, row-aligned with ``table``. Columns
        ``Parameter`` (table input only), ``CI``, ``CI_low``, ``CI_high``.
    ci_method : str
        "HDI" or "ETI".
    """

    table: pd.DataFrame
    ci_bounds: pd.DataFrame
    ci_method: str = "HDI"

    def __len__(self) -> int:
        return len(self.table)

    def __float__(self) -> float:
        if len(self.table) != 1:
            raise TypeError(
                f"Only single-row results convert to float, this one has {len(self.table)} rows"
            )
        return float(self.table["ROPE_Percentage"].iloc[0])

    @property
    def percentages(self) -> np.ndarray:
        """ROPE percentages in row order."""
        return self.table["ROPE_Percentage"].to_numpy(dtype=float)

    @property
    def parameters(self) -> list[str]:
        """Parameter names in first-seen row order (empty for a single sample)."""
        if "Parameter" not in self.table:
            return []
        return list(dict.fromkeys(self.table["Parameter"]))

    def bounds_for(self, parameter: str) -> pd.DataFrame:
        """Interval bounds recorded for one parameter."""
        rows = self.ci_bounds[self.ci_bounds["Parameter"] == parameter]
        return rows[BOUNDS_COLUMNS].reset_index(drop=True)

    def to_frame(self) -> pd.DataFrame:
        """Copy of the result table."""
        return self.table.copy()
