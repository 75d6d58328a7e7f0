"""
ropemix
=======

Summaries of Bayesian posterior draws.

This package computes two quantities from posterior draws:
the proportion of a credible interval that falls inside a region of
practical equivalence (ROPE), and a mixture posterior built by resampling
the draws of several candidate models in proportion to their posterior
model probabilities.

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. Interval (interval/ci.py):
   - HDI and ETI bounds of a vector of draws.
   - Raises DegenerateSampleError when no interval exists.

2. ROPE (rope/rope.py):
   - Filters draws to the credible interval, then counts the fraction
     inside the ROPE, for each requested level.
   - Vectors, tables (one column per parameter) and tables grouped by
     response with one range per group.
   - Degenerate cells become NaN; siblings are unaffected.

3. Mixture (mixture/weighted.py):
   - Normalizes model weights, allocates round(n * p_i) draws per model,
     samples without replacement, fills absent parameters, stacks blocks.

4. Adapters (adapters/):
   - One extract_parameters capability behind a type registry, so the
     engines only ever see ParameterTables.

Unified import style
--------------------
Top-level:
  from ropemix import rope_overlap, rope_model, weighted_mixture
  from ropemix import ParameterTable, PosteriorDraws, RopeConfig, MixtureConfig

Subpackages:
  from ropemix.interval import hdi, eti, credible_interval
  from ropemix.rope import rope_range, check_multicollinearity, RopeResult
  from ropemix.mixture import weighted_posteriors, weighted_posteriors_from_models
  from ropemix.adapters import register_adapter, extract_parameters
  from ropemix.utils import seed, split

Data flow
---------
- An adapter (or the caller) produces a ParameterTable: one column per
  parameter, one row per draw.
- rope_overlap / weighted_mixture consume tables and return RopeResult /
  MixtureResult, each carrying its provenance (interval bounds, weights
  table) for downstream reporting.

----------------------------------------------------------------------
"""

from . import adapters as adapters
from . import data as data
from . import interval as interval
from . import mixture as mixture
from . import rope as rope
from . import utils as utils
from .adapters import PosteriorDraws, extract_parameters, register_adapter
from .config import MixtureConfig, RopeConfig
from .data import ParameterTable
from .errors import (
    CollinearityWarning,
    DegenerateSampleError,
    InsufficientSamplesError,
    InvalidArgumentError,
)
from .interval import credible_interval, eti, hdi
from .mixture import (
    MixtureResult,
    weighted_mixture,
    weighted_posteriors,
    weighted_posteriors_from_models,
)
from .rope import RopeResult, rope_model, rope_overlap, rope_range

__all__ = [
    # Interval
    "credible_interval",
    "hdi",
    "eti",
    # ROPE
    "rope_overlap",
    "rope_model",
    "rope_range",
    "RopeResult",
    # Mixture
    "weighted_mixture",
    "weighted_posteriors",
    "weighted_posteriors_from_models",
    "MixtureResult",
    # Data and adapters
    "ParameterTable",
    "PosteriorDraws",
    "extract_parameters",
    "register_adapter",
    # Configuration
    "RopeConfig",
    "MixtureConfig",
    # Errors
    "InvalidArgumentError",
    "DegenerateSampleError",
    "InsufficientSamplesError",
    "CollinearityWarning",
    # Subpackages
    "adapters",
    "data",
    "interval",
    "mixture",
    "rope",
    "utils",
]
