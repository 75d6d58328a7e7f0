"""
result.py
---------

Result container for the mixture engine.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from ropemix.data import ParameterTable


@dataclass(frozen=True, eq=False)
class MixtureResult:
    """
    Posterior draws mixed across models.

    Attributes
    ----------
    samples : ParameterTable
        Concatenated draws, model blocks in input order. Columns are the
        union of the contributing models' parameters in first-seen order.
    weights : pd.DataFrame
        Columns ``Model`` and ``weights``: draws allocated to every input
        model, including models allocated zero draws.
    """

    samples: ParameterTable
    weights: pd.DataFrame

    def __getitem__(self, name: str) -> np.ndarray:
        return self.samples[name]

    def __len__(self) -> int:
        return self.samples.n_draws

    @property
    def names(self) -> list[str]:
        return self.samples.names

    @property
    def n_draws(self) -> int:
        return self.samples.n_draws

    def to_frame(self) -> pd.DataFrame:
        """Mixture draws as a DataFrame."""
        return self.samples.to_frame()
