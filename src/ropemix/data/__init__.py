"""
ropemix.data
============

Containers for posterior draws.

Includes:
- table: ParameterTable, as_parameter_table, normalize_range
"""

from .table import ParameterTable, as_parameter_table, normalize_range

__all__ = ["ParameterTable", "as_parameter_table", "normalize_range"]
