"""
Ordered List Engine - fractional positions for drag-and-drop columns.
"""

from trip_planner.kernel.ordering.positions import (
    DEFAULT_GAP,
    OrderingDegeneracy,
    Placement,
    PreconditionViolation,
    append_position,
    check_strictly_between,
    classify_placement,
    compute_insertion_position,
    is_degenerate,
    neighbours,
    renumber,
)

__all__ = [
    "DEFAULT_GAP",
    "OrderingDegeneracy",
    "Placement",
    "PreconditionViolation",
    "append_position",
    "check_strictly_between",
    "classify_placement",
    "compute_insertion_position",
    "is_degenerate",
    "neighbours",
    "renumber",
]
