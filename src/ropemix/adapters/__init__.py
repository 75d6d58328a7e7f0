"""
adapters
========

Model-representation adapters behind one ``extract_parameters`` capability.

This subpackage provides:
- PosteriorAdapter: base class for converting a fitted-model object into a
  ParameterTable, with optional capabilities (default range, grouping,
  collinearity flag, sampleability)
- register_adapter / get_adapter: type registry
- extract_parameters: registry-dispatched extraction
- PosteriorDraws: library-neutral container for fitted-model draws

Built-in registrations
----------------------
- PosteriorDraws -> PosteriorDrawsAdapter
- ParameterTable, pandas.DataFrame, Mapping -> TableAdapter
"""

from collections.abc import Mapping

import pandas as pd

from ropemix.data import ParameterTable

from .base import (
    PosteriorAdapter,
    extract_parameters,
    get_adapter,
    register_adapter,
)
from .draws import PosteriorDraws, PosteriorDrawsAdapter, TableAdapter

register_adapter(PosteriorDraws, PosteriorDrawsAdapter())
register_adapter(ParameterTable, TableAdapter())
register_adapter(pd.DataFrame, TableAdapter())
register_adapter(Mapping, TableAdapter())

__all__ = [
    "PosteriorAdapter",
    "PosteriorDraws",
    "PosteriorDrawsAdapter",
    "TableAdapter",
    "extract_parameters",
    "get_adapter",
    "register_adapter",
]
