"""
collinearity.py
---------------

Advisory pairwise-correlation check for ROPE on several parameters.

ROPE percentages are computed on univariate marginals, which assumes the
parameters are independent. When two parameters are strongly correlated
their joint distribution may shift towards or away from the ROPE, so the
marginal percentages can mislead (Kruschke 2014, 340f).

The check only ever warns. It never changes any ROPE percentage.

References
----------
Kruschke, J. K. (2014). Doing Bayesian data analysis: A tutorial with R,
JAGS, and Stan. Academic Press.
"""

from __future__ import annotations

import re
import warnings
from typing import Any

import numpy as np
import pandas as pd

from ropemix.data import as_parameter_table
from ropemix.errors import CollinearityWarning

_SKIP = re.compile(r"(?i)intercept|^(r_|sd_|prior_|cor_|lp__)")


def pairwise_correlations(x: Any) -> pd.DataFrame:
    """
    Pearson correlation for every pair of non-intercept parameters.

    Parameters
    ----------
    x : ParameterTable, DataFrame or mapping of draws

    Returns
    -------
    pd.DataFrame
        Columns ``Parameter1``, ``Parameter2``, ``r``; one row per unordered
        pair. Constant columns are left out.
    """
    table = as_parameter_table(x)
    names = [
        name
        for name in table.names
        if not _SKIP.search(name) and np.ptp(table[name]) > 0
    ]
    if len(names) < 2:
        return pd.DataFrame(
            {
                "Parameter1": pd.Series(dtype=object),
                "Parameter2": pd.Series(dtype=object),
                "r": pd.Series(dtype=float),
            }
        )

    draws = np.stack([table[name] for name in names])
    corr = np.corrcoef(draws)
    rows = [
        {"Parameter1": names[i], "Parameter2": names[j], "r": float(corr[i, j])}
        for i in range(len(names))
        for j in range(i + 1, len(names))
    ]
    return pd.DataFrame(rows, columns=["Parameter1", "Parameter2", "r"])


def check_multicollinearity(
    x: Any,
    threshold: float = 0.7,
    *,
    verbose: bool = True,
) -> pd.DataFrame:
    """
    Flag parameter pairs whose absolute correlation exceeds ``threshold``.

    Parameters
    ----------
    x : ParameterTable, DataFrame or mapping of draws
    threshold : float, default=0.7
    verbose : bool, default=True
        Emit a CollinearityWarning naming the flagged pairs.

    Returns
    -------
    pd.DataFrame
        The flagged rows of :func:`pairwise_correlations`.
    """
    corr = pairwise_correlations(x)
    flagged = corr[corr["r"].abs() > threshold].reset_index(drop=True)
    if verbose and len(flagged):
        pairs = ", ".join(
            f"{a} and {b}" for a, b in zip(flagged["Parameter1"], flagged["Parameter2"])
        )
        strongest = float(flagged["r"].abs().max())
        kind = "Probable" if strongest > 0.9 else "Possible"
        warnings.warn(
            f"{kind} multicollinearity between {pairs} (r = {strongest:.2f}). "
            "This might lead to inappropriate ROPE results.",
            CollinearityWarning,
            stacklevel=2,
        )
    return flagged
