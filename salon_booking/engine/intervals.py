"""
Interval algebra for availability computation.

Intervals are half-open ``[start, end)`` ranges of naive local datetimes.
Every operation returns a new list; inputs are never mutated, and
zero-length results are dropped.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional


@dataclass(frozen=True)
class TimeInterval:
    """A ``[start, end)`` time range with ``start <= end``."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Interval start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start >= self.end

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and self.end > other.start

    def expand(self, minutes: int) -> "TimeInterval":
        """Pad both sides by ``minutes``."""
        pad = timedelta(minutes=minutes)
        return TimeInterval(self.start - pad, self.end + pad)


def clip_interval(interval: TimeInterval, start: datetime, end: datetime) -> Optional[TimeInterval]:
    """Return the part of ``interval`` inside ``[start, end)``, or None if nothing is left."""
    clipped_start = max(interval.start, start)
    clipped_end = min(interval.end, end)
    if clipped_start >= clipped_end:
        return None
    return TimeInterval(clipped_start, clipped_end)


def intersect_intervals(
    a: Iterable[TimeInterval], b: Iterable[TimeInterval]
) -> list[TimeInterval]:
    """Pairwise overlaps between every interval in ``a`` and every interval in ``b``."""
    others = list(b)
    result = []
    for first in a:
        for second in others:
            overlap = clip_interval(first, second.start, second.end)
            if overlap is not None:
                result.append(overlap)
    return result


def subtract_intervals(
    intervals: Iterable[TimeInterval], to_remove: Iterable[TimeInterval]
) -> list[TimeInterval]:
    """Remove every interval in ``to_remove`` from ``intervals``.

    Removals are applied one after another; each pass rebuilds the list,
    keeping untouched intervals and splitting overlapped ones into the
    piece before and the piece after the removed range.
    """
    result = [interval for interval in intervals if not interval.is_empty()]

    for removal in to_remove:
        if removal.is_empty():
            continue

        remaining = []
        for interval in result:
            if not interval.overlaps(removal):
                remaining.append(interval)
                continue
            if interval.start < removal.start:
                remaining.append(TimeInterval(interval.start, removal.start))
            if interval.end > removal.end:
                remaining.append(TimeInterval(removal.end, interval.end))
        result = remaining

    return result


def covered_time(intervals: Iterable[TimeInterval]) -> timedelta:
    return sum((interval.duration for interval in intervals), timedelta())
