"""
rope
====

Region of Practical Equivalence (ROPE) overlap.

This subpackage provides:
- rope_overlap: percentage of the credible interval inside the ROPE, for a
  vector, a table, or a table grouped by response with per-group ranges
- rope_model: the same for fitted-model objects via the adapter registry
- rope_range: default range for raw draws or model objects
- check_multicollinearity / pairwise_correlations: advisory check for
  correlated parameters
- RopeResult: result container
"""

from .collinearity import check_multicollinearity, pairwise_correlations
from .result import RopeResult
from .rope import rope_overlap
from .model import rope_model, rope_range

__all__ = [
    "RopeResult",
    "check_multicollinearity",
    "pairwise_correlations",
    "rope_model",
    "rope_overlap",
    "rope_range",
]
