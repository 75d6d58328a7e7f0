"""
interval
========

Credible interval primitives used by the ROPE engine.

- hdi : Highest-Density Interval
- eti : Equal-Tailed Interval
- credible_interval : dispatch on "HDI" / "ETI"
"""

from .ci import credible_interval, eti, hdi

__all__ = ["credible_interval", "eti", "hdi"]
