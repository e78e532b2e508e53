"""Angular partitioning of weighted entries into contiguous pie slices.

:func:`partition` walks an ordered sequence of :class:`WeightedEntry` items and
assigns each a sweep of the full circle proportional to its share of the total
weight. The result is a list of :class:`AngularSlice` records in input order,
where every slice starts exactly where the previous one ended, the first
starts at 0 and the last ends at 360 degrees. Zero-weight entries after the last
weighted one collapse onto 360. Weights are scaled by the largest one before
summing, so very large finite weights cannot overflow.

The function is pure: it keeps no state between calls and only allocates its
own output, so it can be called from any thread.
"""
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, List

FULL_CIRCLE: float = 360.0
ANGLE_TOLERANCE: float = 1e-9


class InvalidWeight(ValueError):
    """Raised when an entry carries a negative or non-finite weight, or one too large for a float.

    Attributes:
        index (int): Position of the offending entry in the input sequence.
        weight (float): The rejected weight.
    """

    def __init__(self, index: int, weight: float) -> None:
        self.index = index
        self.weight = weight
        super().__init__(f'Entry {index} has invalid weight {weight!r}, weights must be finite and >= 0.')


@dataclass(frozen=True, slots=True)
class WeightedEntry:
    """Input record: a non-negative magnitude and an opaque tag."""
    weight: float
    tag: Any = None


@dataclass(frozen=True, slots=True)
class AngularSlice:
    """Output record: the angular extent assigned to one entry, in degrees."""
    start_angle: float
    end_angle: float
    tag: Any = None

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


def validate_weight(index: int, weight: float) -> float:
    """Return `weight` as a float, or raise :class:`InvalidWeight` unless it is finite and non-negative."""
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise InvalidWeight(index, weight)
    try:
        value = float(weight)
    except OverflowError:
        raise InvalidWeight(index, weight) from None
    if not math.isfinite(value) or value < 0:
        raise InvalidWeight(index, weight)
    return value


def partition(entries: Iterable[WeightedEntry]) -> List[AngularSlice]:
    """Partition the full circle between `entries` proportionally to their weights.

    Args:
        entries: Ordered weighted entries. May be empty.

    Returns:
        list[AngularSlice]: One slice per entry, in input order. Empty when the
        input is empty or all weights are zero.

    Raises:
        InvalidWeight: If any entry has a negative or non-finite weight. All
            weights are checked before anything is computed.
    """
    entries = tuple(entries)
    weights = [validate_weight(index, entry.weight) for index, entry in enumerate(entries)]

    # Weights are scaled by the largest one so the sum cannot overflow
    scale = max(weights, default=0.0)
    if scale == 0:
        return []
    shares = [w / scale for w in weights]
    total = math.fsum(shares)

    closing = max(i for i, share in enumerate(shares) if share > 0)

    slices: List[AngularSlice] = []
    cursor = 0.0
    for index, (entry, share) in enumerate(zip(entries, shares)):
        if index > closing:
            slices.append(AngularSlice(FULL_CIRCLE, FULL_CIRCLE, entry.tag))
            continue

        end = min(cursor + FULL_CIRCLE * (share / total), FULL_CIRCLE)
        if index == closing:
            if abs(end - FULL_CIRCLE) > ANGLE_TOLERANCE:
                logging.debug(f'Closing partition: accumulated drift of {end - FULL_CIRCLE:.3e} degrees')
            # The last weighted slice always ends exactly on the full circle
            end = FULL_CIRCLE

        slices.append(AngularSlice(cursor, end, entry.tag))
        cursor = end

    return slices
