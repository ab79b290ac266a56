"""Utility functions for synthdata."""

from synthdata.utils.helpers import (
    flatten_dict,
    format_cell,
)

__all__ = [
    "flatten_dict",
    "format_cell",
]
