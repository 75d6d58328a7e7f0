"""
errors.py
---------

Exception and warning types raised by ropemix.

All exceptions subclass ValueError so callers that only care about
"bad input" can keep catching ValueError.

- InvalidArgumentError: caller contract violation, fatal to the call.
- DegenerateSampleError: an interval cannot be computed for a sample.
  The ROPE engine recovers it per cell as NaN.
- InsufficientSamplesError: a model cannot supply the requested draws.
- CollinearityWarning: advisory only, never raised as an error.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Malformed range, level, weights, or model set."""


class DegenerateSampleError(ValueError):
    """Credible interval cannot be computed for this sample and level."""


class InsufficientSamplesError(ValueError):
    """A model was asked to contribute more draws than it holds."""


class CollinearityWarning(UserWarning):
    """Correlated parameters make marginal ROPE percentages unreliable."""
