"""
Flat interval index using sortedcontainers.SortedKeyList.

Keeps entries sorted by low bound and answers queries by scanning every entry
whose low can still match. It has none of the tree's pruning, which makes it a
simple baseline for profiling and an independent oracle for tests.
"""

from typing import Any, Generic, Iterator, Optional, TypeVar
from sortedcontainers import SortedKeyList

from .interval import Entry, Interval, InvalidInterval

T = TypeVar("T")


def _low_key(entry: Entry) -> Any:
    return entry.interval.low


class SortedIntervalIndex(Generic[T]):
    """
    Interval index backed by a SortedKeyList ordered on low bound.

    Provides the same query surface as IntervalTree with linear scans.
    """

    def __init__(self):
        self._data = SortedKeyList(key=_low_key)

    def insert(self, low: T, high: T, payload: Any = None) -> None:
        """
        Insert the interval [low, high].

        Raises:
            InvalidInterval: If low > high
        """
        if low > high:
            raise InvalidInterval(
                f"Invalid interval [{low}, {high}]: low must be less than or equal to high"
            )
        self._data.add(Entry(Interval(low, high), payload))

    def remove(self, interval: Interval[T], payload: Any = None) -> bool:
        """
        Remove one entry with exactly this interval and payload.

        Returns:
            True if an entry was removed
        """
        entry = Entry(Interval.coerce(interval), payload)
        try:
            self._data.remove(entry)
        except ValueError:
            return False
        return True

    def _candidates(self, high: T) -> Iterator[Entry]:
        """Entries whose low is at most high."""
        return self._data.irange_key(max_key=high)

    def containing(self, value: T) -> list[Entry]:
        return [e for e in self._candidates(value) if e.interval.contains(value)]

    def overlapping(self, low: T, high: T) -> list[Entry]:
        return [e for e in self._candidates(high) if e.interval.overlaps(low, high)]

    def find_by_min_max(self, min_value: T, max_value: T) -> list[Entry]:
        return [e for e in self._candidates(max_value) if e.interval.high >= min_value]

    def max_high_overlapping(self, low: T, high: T, default: Any = None) -> Optional[Any]:
        """Largest high bound among overlapping entries, or default."""
        highs = [e.interval.high for e in self.overlapping(low, high)]
        return max(highs) if highs else default

    def entries(self) -> list[Entry]:
        """Get all entries in ascending low-bound order."""
        return list(self._data)

    def clear(self) -> None:
        self._data.clear()

    @property
    def size(self) -> int:
        """Get number of entries in the index."""
        return len(self._data)

    def is_empty(self) -> bool:
        """Check if index is empty."""
        return len(self._data) == 0
