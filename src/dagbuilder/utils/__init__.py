"""
Utility functions for dagbuilder.

This module contains low-level helpers used across the system.
No graph logic should live here.
"""

from dagbuilder.utils.text import normalize_label
from dagbuilder.utils.ids import new_node_id
from dagbuilder.utils.helpers import PositionSampler

__all__ = [
    "normalize_label",
    "new_node_id",
    "PositionSampler",
]
