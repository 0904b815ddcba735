"""
Closed intervals and query result entries.

An Interval is a plain value: construction never validates its bounds, so an
inverted interval can exist, but the tree refuses to store one.
"""

from __future__ import annotations

from typing import Any, Generic, NamedTuple, Sequence, TypeVar, Union

T = TypeVar("T")


class InvalidInterval(ValueError):
    """Raised when an interval with low > high is inserted."""
    pass


class Interval(Generic[T]):
    """Closed range [low, high] over a totally ordered type."""

    __slots__ = ("low", "high")

    def __init__(self, low: T, high: T):
        self.low = low
        self.high = high

    @classmethod
    def coerce(cls, value: Union[Interval[T], Sequence[T]]) -> Interval[T]:
        """
        Build an interval from an Interval or a (low, high) pair.

        Args:
            value: Interval instance or two-element sequence

        Returns:
            Interval instance
        """
        if isinstance(value, Interval):
            return value
        low, high = value
        return cls(low, high)

    def is_valid(self) -> bool:
        return self.low <= self.high

    def contains(self, value: T) -> bool:
        """Check whether a point lies inside this interval."""
        return self.low <= value <= self.high

    def overlaps(self, low: T, high: T) -> bool:
        """Check whether this interval intersects [low, high]."""
        return self.low <= high and self.high >= low

    def encloses(self, low: T, high: T) -> bool:
        """Check whether this interval fully covers [low, high]."""
        return self.low <= low and self.high >= high

    def within(self, low: T, high: T) -> bool:
        """Check whether this interval lies inside [low, high]."""
        return self.low >= low and self.high <= high

    def before(self, other: Interval[T]) -> bool:
        """True if this interval ends before other starts."""
        return self.high < other.low

    def after(self, other: Interval[T]) -> bool:
        """True if this interval starts after other ends."""
        return self.low > other.high

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.low == other.low and self.high == other.high

    def __hash__(self) -> int:
        return hash((self.low, self.high))

    def __iter__(self):
        yield self.low
        yield self.high

    def __str__(self) -> str:
        return f"[{self.low}, {self.high}]"

    def __repr__(self) -> str:
        return f"Interval({self.low!r}, {self.high!r})"


class Entry(NamedTuple):
    """An interval paired with the payload it was inserted with."""
    interval: Interval
    payload: Any = None
