"""
Sparse fractional positions for ordered columns.

Items in a column are ranked by a float ``position``. Moving an item only
computes a new value for that item from its two future neighbours; nothing
else in the column is rewritten.
"""

import math
from enum import Enum
from typing import List, Optional, Sequence

# Spacing used for an empty column, for appends, and for renumbering
DEFAULT_GAP = 10000.0


class PreconditionViolation(ValueError):
    """Caller passed input the engine's contract does not allow."""


class OrderingDegeneracy(ArithmeticError):
    """Neighbouring positions are too close together to bisect."""

    def __init__(self, lower: Optional[float], upper: Optional[float], value: float):
        self.lower = lower
        self.upper = upper
        self.value = value
        super().__init__(
            f"Position {value!r} is not strictly between {lower!r} and {upper!r}"
        )


class Placement(str, Enum):
    """Where in the destination column an item lands."""
    EMPTY = "empty"
    AT_START = "at_start"
    AT_END = "at_end"
    BETWEEN = "between"


def classify_placement(length: int, target_index: int) -> Placement:
    """Map a column length and insertion index to one of the four cases."""
    if length < 0:
        raise PreconditionViolation(f"Column length must be >= 0, got {length}")
    if not 0 <= target_index <= length:
        raise PreconditionViolation(
            f"Target index {target_index} outside [0, {length}]"
        )
    if length == 0:
        return Placement.EMPTY
    if target_index == 0:
        return Placement.AT_START
    if target_index == length:
        return Placement.AT_END
    return Placement.BETWEEN


def _check_positions(positions: Sequence[float]) -> None:
    for i, value in enumerate(positions):
        if not math.isfinite(value):
            raise PreconditionViolation(f"Position at {i} is not finite: {value!r}")
        if i and positions[i - 1] >= value:
            raise PreconditionViolation(
                f"Positions not strictly ascending at {i}: "
                f"{positions[i - 1]!r} >= {value!r}"
            )


def _check_gap(gap: float) -> None:
    if not (math.isfinite(gap) and gap > 0):
        raise PreconditionViolation(f"Gap must be a positive finite number, got {gap!r}")


def compute_insertion_position(
    positions: Sequence[float],
    target_index: int,
    gap: float = DEFAULT_GAP,
) -> float:
    """
    Compute the position for an item inserted at ``target_index``.

    Args:
        positions: Current positions of the destination column, ascending,
            without the item being moved.
        target_index: Insert before the item now at this index; equal to
            ``len(positions)`` to append.
        gap: Baseline spacing for an empty column and for appends.

    Returns:
        A position strictly between the neighbours at ``target_index - 1``
        and ``target_index`` (whichever exist), as long as they are far
        enough apart for float arithmetic to separate them.

    Raises:
        PreconditionViolation: positions unsorted or non-finite, index out
            of range, or non-positive gap.
    """
    _check_gap(gap)
    _check_positions(positions)
    placement = classify_placement(len(positions), target_index)

    if placement is Placement.EMPTY:
        return gap
    if placement is Placement.AT_START:
        return positions[0] / 2
    if placement is Placement.AT_END:
        return positions[-1] + gap
    return (positions[target_index - 1] + positions[target_index]) / 2


def neighbours(
    positions: Sequence[float],
    target_index: int,
) -> tuple[Optional[float], Optional[float]]:
    """Return the (lower, upper) neighbours of an insertion point."""
    lower = positions[target_index - 1] if target_index > 0 else None
    upper = positions[target_index] if target_index < len(positions) else None
    return lower, upper


def check_strictly_between(
    positions: Sequence[float],
    target_index: int,
    value: float,
) -> float:
    """
    Return ``value`` if it sorts strictly between its neighbours.

    Raises:
        OrderingDegeneracy: the gap has been exhausted and the column
            needs renumbering.
    """
    lower, upper = neighbours(positions, target_index)
    if (lower is not None and not value > lower) or (upper is not None and not value < upper):
        raise OrderingDegeneracy(lower, upper, value)
    return value


def is_degenerate(positions: Sequence[float], target_index: int, value: float) -> bool:
    """True when ``value`` fails to separate its neighbours."""
    try:
        check_strictly_between(positions, target_index, value)
    except OrderingDegeneracy:
        return True
    return False


def append_position(max_position: Optional[float], gap: float = DEFAULT_GAP) -> float:
    """Position for a newly created item, after every existing one."""
    _check_gap(gap)
    if max_position is None:
        return gap
    return max_position + gap


def renumber(count: int, gap: float = DEFAULT_GAP) -> List[float]:
    """
    Fresh, evenly spaced positions for a column of ``count`` items.

    This is a repair step for a column whose gaps have shrunk too far;
    the engine never applies it on its own.
    """
    _check_gap(gap)
    if count < 0:
        raise PreconditionViolation(f"Count must be >= 0, got {count}")
    return [gap * (i + 1) for i in range(count)]
