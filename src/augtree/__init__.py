"""
augtree: Augmented AVL interval tree

Indexes closed intervals with optional payloads for point containment and
range overlap queries.
"""

__version__ = "0.1.0"

from .interval import Interval, Entry, InvalidInterval
from .tree import IntervalTree, Node, PerformanceWarning
from .sortedindex import SortedIntervalIndex
from .limits import type_minimum

__all__ = [
    "Interval",
    "Entry",
    "InvalidInterval",
    "IntervalTree",
    "Node",
    "PerformanceWarning",
    "SortedIntervalIndex",
    "type_minimum",
]
