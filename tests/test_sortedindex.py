"""Tests for the sorted-list interval index."""

import pytest
from augtree.interval import Interval, Entry, InvalidInterval
from augtree.sortedindex import SortedIntervalIndex


def make_index() -> SortedIntervalIndex:
    index = SortedIntervalIndex()
    index.insert(1, 3, "a")
    index.insert(5, 8, "b")
    index.insert(2, 6, "c")
    index.insert(15, 20, "d")
    return index


class TestSortedIntervalIndex:
    """Test SortedIntervalIndex class."""

    def test_empty(self):
        """Test empty index."""
        index = SortedIntervalIndex()
        assert index.is_empty()
        assert index.size == 0
        assert index.containing(1) == []
        assert index.max_high_overlapping(0, 1) is None

    def test_entries_sorted(self):
        """Test entries are kept in low-bound order."""
        index = make_index()
        assert [e.payload for e in index.entries()] == ["a", "c", "b", "d"]

    def test_queries(self):
        """Test containment and overlap queries."""
        index = make_index()
        assert {e.payload for e in index.containing(6)} == {"b", "c"}
        assert {e.payload for e in index.overlapping(4, 5)} == {"b", "c"}
        assert {e.payload for e in index.find_by_min_max(7, 16)} == {"b", "d"}
        assert index.max_high_overlapping(0, 100) == 20
        assert index.max_high_overlapping(9, 14, default=-1) == -1

    def test_reject_inverted(self):
        """Test invalid intervals are refused."""
        index = make_index()
        with pytest.raises(InvalidInterval):
            index.insert(5, 2)
        assert index.size == 4

    def test_remove_exact(self):
        """Test removal needs the exact interval and payload."""
        index = make_index()
        assert not index.remove(Interval(5, 100), "b")
        assert not index.remove(Interval(5, 8), "x")
        assert index.remove((5, 8), "b")
        assert index.size == 3
        assert Entry(Interval(5, 8), "b") not in index.entries()

    def test_clear(self):
        """Test clear."""
        index = make_index()
        index.clear()
        assert index.is_empty()
