"""
table.py
--------

Core data container for posterior draws.

defines:
- ParameterTable: ordered, immutable mapping parameter name -> draws
- as_parameter_table: coerce mappings, DataFrames and 2-D arrays
- normalize_range: validate a ROPE range and order it as (low, high)

Notes
-----
- Draws are stored as read-only NumPy float64 arrays, one row per
  posterior draw, columns aligned by draw index.
- Interval and ROPE arithmetic run on these float64 arrays directly.
  JAX keys drive row selection in the mixture only.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from ropemix.errors import InvalidArgumentError


def _as_column(name: str, values: Any) -> np.ndarray:
    column = np.array(values, dtype=float, copy=True)
    if column.ndim != 1:
        raise InvalidArgumentError(
            f"Draws for parameter {name!r} must be 1-D, got shape {column.shape}"
        )
    column.setflags(write=False)
    return column


class ParameterTable(Mapping):
    """
    Posterior draws of several scalar parameters.

    Parameters
    ----------
    columns : Mapping[str, array-like]
        Parameter name -> 1-D draws. Insertion order is kept.

    Raises
    ------
    InvalidArgumentError
        If a column is not 1-D or the columns differ in length.

    Examples
    --------
    >>> table = ParameterTable({"a": [0.1, 0.2], "b": [1.0, 1.1]})
    >>> table.names
    ['a', 'b']
    >>> table.n_draws
    2
    """

    def __init__(self, columns: Mapping[str, Any]) -> None:
        self._columns: dict[str, np.ndarray] = {
            str(name): _as_column(str(name), values)
            for name, values in columns.items()
        }
        lengths = {len(col) for col in self._columns.values()}
        if len(lengths) > 1:
            raise InvalidArgumentError(
                f"All parameters must have the same number of draws, got {sorted(lengths)}"
            )
        self._n_draws = lengths.pop() if lengths else 0

    def __getitem__(self, name: str) -> np.ndarray:
        return self._columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        """Return number of parameters."""
        return len(self._columns)

    def __repr__(self) -> str:
        return f"ParameterTable(names={self.names}, n_draws={self.n_draws})"

    @property
    def names(self) -> list[str]:
        return list(self._columns)

    @property
    def n_draws(self) -> int:
        """Number of posterior draws (rows)."""
        return self._n_draws

    def select(self, rows: Sequence[int] | np.ndarray) -> ParameterTable:
        """
        Return a new table holding only the given draw indices.

        Parameters
        ----------
        rows : sequence of int
            Row indices, in the order they should appear.
        """
        idx = np.asarray(rows, dtype=int)
        return ParameterTable({name: col[idx] for name, col in self._columns.items()})

    def subset(self, names: Sequence[str]) -> ParameterTable:
        """Return a new table restricted to ``names``, in that order."""
        missing = [name for name in names if name not in self._columns]
        if missing:
            raise InvalidArgumentError(f"Unknown parameters: {missing}")
        return ParameterTable({name: self._columns[name] for name in names})

    def to_frame(self) -> pd.DataFrame:
        """Return the draws as a DataFrame (one column per parameter)."""
        return pd.DataFrame({name: np.array(col) for name, col in self._columns.items()})

    @classmethod
    def from_array(cls, draws: Any, names: Sequence[str]) -> ParameterTable:
        """
        Build a table from a 2-D array of shape (n_draws, n_parameters).

        Parameters
        ----------
        draws : array-like, shape (n_draws, n_parameters)
        names : sequence of str
            Column names, one per parameter.
        """
        arr = np.asarray(draws, dtype=float)
        if arr.ndim != 2:
            raise InvalidArgumentError(
                f"draws must be 2-D (n_draws, n_parameters), got shape {arr.shape}"
            )
        if arr.shape[1] != len(names):
            raise InvalidArgumentError(
                f"Got {len(names)} names for {arr.shape[1]} parameter columns"
            )
        return cls({name: arr[:, j] for j, name in enumerate(names)})


def as_parameter_table(x: Any) -> ParameterTable:
    """
    Coerce a table-like input to a ParameterTable.

    Accepts a ParameterTable, a ``pandas.DataFrame`` or a mapping of
    parameter name -> draws.
    """
    if isinstance(x, ParameterTable):
        return x
    if isinstance(x, pd.DataFrame):
        return ParameterTable({name: x[name].to_numpy() for name in x.columns})
    if isinstance(x, Mapping):
        return ParameterTable(x)
    raise InvalidArgumentError(
        f"Cannot interpret {type(x).__name__} as a table of posterior draws"
    )


def normalize_range(range_: Any) -> tuple[float, float]:
    """
    Validate a ROPE range and return it as ``(min, max)``.

    Bounds may be given in either order.

    Raises
    ------
    InvalidArgumentError
        If ``range_`` is not exactly two finite-or-infinite numbers.
    """
    if isinstance(range_, (str, bytes)) or np.ndim(range_) != 1:
        raise InvalidArgumentError(
            "`range` should be 'default' or a pair of numeric values (e.g. (-0.1, 0.1))"
        )
    try:
        bounds = np.asarray(range_, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(
            f"`range` must be numeric, got {range_!r}"
        ) from exc
    if bounds.shape != (2,) or np.isnan(bounds).any():
        raise InvalidArgumentError(
            f"`range` must hold exactly two numbers, got {range_!r}"
        )
    return float(bounds.min()), float(bounds.max())
