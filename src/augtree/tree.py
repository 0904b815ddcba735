"""
Augmented AVL interval tree.

Nodes are ordered by interval low bound and each node caches the largest high
bound found in its subtree (``max``). Queries use that cached value to skip
left subtrees that cannot reach the query, which keeps point and range
searches sublinear on typical data.

Insertion rebalances with AVL rotations. Removal only rotates when the tree
was configured with ``rebalance_on_remove(True)``; otherwise balance may
degrade over many removals and a PerformanceWarning is issued once the tree
grows taller than any AVL tree of the same size could be.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, Optional, Sequence, TypeVar, Union
import math
import warnings
import numpy as np

from .interval import Entry, Interval, InvalidInterval

T = TypeVar("T")

# Height of an AVL tree with n nodes is below 1.4405 * log2(n + 2) - 0.3277
_AVL_HEIGHT_FACTOR = 1.4405
_AVL_HEIGHT_OFFSET = 0.3277


class PerformanceWarning(UserWarning):
    """Warning about performance-related issues."""
    pass


class Node(Generic[T]):
    """A tree node: one interval, its payload, and cached subtree data."""

    __slots__ = ("interval", "payload", "max", "height", "left", "right")

    def __init__(self, interval: Interval[T], payload: Any = None):
        self.interval = interval
        self.payload = payload
        self.max: T = interval.high  # largest high in this subtree
        self.height: int = 1
        self.left: Optional[Node[T]] = None
        self.right: Optional[Node[T]] = None


def _height(node: Optional[Node]) -> int:
    return node.height if node is not None else 0


def _balance_factor(node: Node) -> int:
    return _height(node.left) - _height(node.right)


def _update(node: Node) -> None:
    """Recompute cached height and max from the node's children."""
    node.height = 1 + max(_height(node.left), _height(node.right))
    m = node.interval.high
    if node.left is not None:
        m = max(m, node.left.max)
    if node.right is not None:
        m = max(m, node.right.max)
    node.max = m


def _rotate_right(node: Node) -> Node:
    pivot = node.left
    node.left = pivot.right
    pivot.right = node
    # Demoted node first: the pivot's max depends on it
    _update(node)
    _update(pivot)
    return pivot


def _rotate_left(node: Node) -> Node:
    pivot = node.right
    node.right = pivot.left
    pivot.left = node
    _update(node)
    _update(pivot)
    return pivot


def _rebalance(node: Node) -> Node:
    """
    Restore the AVL condition at node with one single or double rotation.

    Args:
        node: Subtree root whose cached data is up to date

    Returns:
        New subtree root
    """
    balance = _balance_factor(node)
    if balance > 1:
        if _balance_factor(node.left) < 0:
            node.left = _rotate_left(node.left)
        return _rotate_right(node)
    if balance < -1:
        if _balance_factor(node.right) > 0:
            node.right = _rotate_right(node.right)
        return _rotate_left(node)
    return node


class IntervalTree(Generic[T]):
    """
    Interval tree over closed intervals with optional payloads.

    Example:
        >>> tree = IntervalTree()
        >>> tree.insert(1, 3)
        >>> tree.insert(2, 6, "b")
        >>> [e.interval for e in tree.containing(2)]
        [Interval(1, 3), Interval(2, 6)]
    """

    def __init__(self, rebalance_on_remove: bool = False):
        self._root: Optional[Node[T]] = None
        self._size = 0
        self._rebalance_on_remove = rebalance_on_remove
        self._may_be_unbalanced = False
        self._warned = False

    @classmethod
    def from_arrays(
        cls,
        lows: Any,
        highs: Any,
        payloads: Optional[Sequence[Any]] = None,
        **kwargs
    ) -> IntervalTree:
        """
        Build a tree from parallel arrays of bounds.

        All bounds are validated before anything is inserted.

        Args:
            lows: Array-like of low bounds
            highs: Array-like of high bounds, same length as lows
            payloads: Optional sequence of payloads, same length as lows
            **kwargs: Passed to the constructor

        Returns:
            New tree holding one interval per index

        Raises:
            ValueError: If the inputs are not one-dimensional or lengths differ
            InvalidInterval: If any low is greater than its high
        """
        lows = np.asarray(lows)
        highs = np.asarray(highs)
        if lows.ndim != 1 or lows.shape != highs.shape:
            raise ValueError(
                f"lows and highs must be 1-d arrays of equal length, "
                f"got shapes {lows.shape} and {highs.shape}"
            )
        if payloads is not None and len(payloads) != len(lows):
            raise ValueError(
                f"Expected {len(lows)} payloads, got {len(payloads)}"
            )

        bad = np.flatnonzero(lows > highs)
        if bad.size:
            i = int(bad[0])
            raise InvalidInterval(
                f"Invalid interval at index {i}: low {lows[i]} > high {highs[i]}"
            )

        tree = cls(**kwargs)
        for i, (low, high) in enumerate(zip(lows.tolist(), highs.tolist())):
            tree.insert(low, high, payloads[i] if payloads is not None else None)
        return tree

    # --- Configuration ---

    def rebalance_on_remove(self, v: Optional[bool] = None) -> Union[bool, IntervalTree[T]]:
        """
        Get or set whether removal rotates to keep the tree balanced.

        Off by default: removal splices nodes out and only refreshes the
        cached max and height on the way up.

        Args:
            v: Optional value to set

        Returns:
            Current value if v is None, otherwise self for chaining
        """
        if v is None:
            return self._rebalance_on_remove

        self._rebalance_on_remove = v
        return self

    # --- Mutation ---

    def insert(self, low: T, high: T, payload: Any = None) -> None:
        """
        Insert the interval [low, high].

        Raises:
            InvalidInterval: If low > high; the tree is left unchanged
        """
        self.insert_interval(Interval(low, high), payload)

    def insert_interval(self, interval: Union[Interval[T], Sequence[T]], payload: Any = None) -> None:
        """Insert an Interval (or a (low, high) pair) with an optional payload."""
        interval = Interval.coerce(interval)
        if interval.low > interval.high:
            raise InvalidInterval(
                f"Invalid interval {interval}: low must be less than or equal to high"
            )
        self._root = self._insert(self._root, interval, payload)
        self._size += 1

    def _insert(self, node: Optional[Node[T]], interval: Interval[T], payload: Any) -> Node[T]:
        if node is None:
            return Node(interval, payload)

        # Equal lows go right
        if interval.low < node.interval.low:
            node.left = self._insert(node.left, interval, payload)
        else:
            node.right = self._insert(node.right, interval, payload)

        _update(node)
        return _rebalance(node)

    def remove(self, interval: Union[Interval[T], Sequence[T]]) -> bool:
        """
        Remove one interval whose low bound equals interval.low.

        The tree is first probed for any interval covering the point
        interval.low; only then is a node with that low bound deleted. The
        high bound is not used to pick between intervals sharing a low.

        Args:
            interval: Interval (or (low, high) pair) naming the low to remove

        Returns:
            True if a node was removed
        """
        interval = Interval.coerce(interval)
        if not self.contains(interval.low):
            return False

        self._root, removed = self._remove(self._root, interval.low)
        if removed:
            self._size -= 1
            if not self._rebalance_on_remove:
                self._may_be_unbalanced = True
                self._check_height()
        return removed

    def _remove(self, node: Optional[Node[T]], low: T) -> tuple[Optional[Node[T]], bool]:
        if node is None:
            return None, False

        if low < node.interval.low:
            node.left, removed = self._remove(node.left, low)
        elif node.interval.low < low:
            node.right, removed = self._remove(node.right, low)
        else:
            if node.left is None:
                return node.right, True
            if node.right is None:
                return node.left, True

            # Two children: take over the in-order successor, then drop it
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.interval = successor.interval
            node.payload = successor.payload
            node.right = self._remove_min(node.right)
            removed = True

        if not removed:
            return node, False
        _update(node)
        if self._rebalance_on_remove:
            node = _rebalance(node)
        return node, True

    def _remove_min(self, node: Node[T]) -> Optional[Node[T]]:
        """Detach the leftmost node of a subtree."""
        if node.left is None:
            return node.right
        node.left = self._remove_min(node.left)
        _update(node)
        if self._rebalance_on_remove:
            node = _rebalance(node)
        return node

    def update(
        self,
        old: Union[Interval[T], Sequence[T]],
        new: Union[Interval[T], Sequence[T]],
        payload: Any = None
    ) -> None:
        """
        Replace old with new: a remove followed by an insert.

        The new interval is validated before old is removed.

        Raises:
            InvalidInterval: If new has low > high
        """
        new = Interval.coerce(new)
        if new.low > new.high:
            raise InvalidInterval(
                f"Invalid interval {new}: low must be less than or equal to high"
            )
        self.remove(old)
        self.insert_interval(new, payload)

    def clear(self) -> None:
        """Remove every interval."""
        self._root = None
        self._size = 0
        self._may_be_unbalanced = False
        self._warned = False

    def _check_height(self) -> None:
        if self._warned or self._root is None:
            return
        bound = _AVL_HEIGHT_FACTOR * math.log2(self._size + 2) - _AVL_HEIGHT_OFFSET
        if self._root.height > bound:
            self._warned = True
            warnings.warn(
                f"Interval tree of {self._size} intervals has height "
                f"{self._root.height} after removals. Queries may slow down; "
                "enable rebalance_on_remove(True) to keep it balanced.",
                PerformanceWarning,
                stacklevel=3
            )

    # --- Queries ---

    def _search(self, query_low: T, accept: Callable[[Interval[T]], bool]) -> Iterator[Node[T]]:
        """
        Yield nodes whose interval passes accept, in pre-order.

        Left subtrees are skipped when their max is below query_low; right
        subtrees are always visited since low ordering says nothing about
        their high bounds.
        """
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            if accept(node.interval):
                yield node
            if node.right is not None:
                stack.append(node.right)
            # Pushed last so it is visited before the right subtree
            if node.left is not None and node.left.max >= query_low:
                stack.append(node.left)

    def containing(self, value: T) -> list[Entry]:
        """
        Find all intervals that contain a point.

        Args:
            value: Point to look up

        Returns:
            Entries whose interval has low <= value <= high (unordered)
        """
        return [
            Entry(n.interval, n.payload)
            for n in self._search(value, lambda i: i.contains(value))
        ]

    def overlapping(self, low: T, high: T) -> list[Entry]:
        """
        Find all intervals that intersect [low, high].

        Returns:
            Entries whose interval overlaps the range (unordered)
        """
        return [
            Entry(n.interval, n.payload)
            for n in self._search(low, lambda i: i.overlaps(low, high))
        ]

    def max_high_overlapping(self, low: T, high: T, default: Any = None) -> Any:
        """
        Find the largest high bound among intervals intersecting [low, high].

        Args:
            low: Range low bound
            high: Range high bound
            default: Returned when nothing overlaps. Pass
                limits.type_minimum(low) to get a type-minimum sentinel.

        Returns:
            Largest overlapping high bound, or default
        """
        found = False
        best = default
        for node in self._search(low, lambda i: i.overlaps(low, high)):
            if not found or node.interval.high > best:
                best = node.interval.high
                found = True
        return best

    def find_by_min_max(self, min_value: T, max_value: T) -> list[Entry]:
        """
        Find intervals with high >= min_value and low <= max_value.

        Returns:
            Matching entries (unordered)
        """
        return [
            Entry(n.interval, n.payload)
            for n in self._search(
                min_value,
                lambda i: i.high >= min_value and i.low <= max_value
            )
        ]

    def enclosing(self, low: T, high: T) -> list[Entry]:
        """Find intervals that fully cover [low, high]."""
        # A covering interval has high >= high, a tighter pruning bound
        return [
            Entry(n.interval, n.payload)
            for n in self._search(high, lambda i: i.encloses(low, high))
        ]

    def within(self, low: T, high: T) -> list[Entry]:
        """Find intervals lying entirely inside [low, high]."""
        return [
            Entry(n.interval, n.payload)
            for n in self._search(low, lambda i: i.within(low, high))
        ]

    def contains(self, value: T) -> bool:
        """Check whether any interval contains the point value."""
        return any(True for _ in self._search(value, lambda i: i.contains(value)))

    def overlaps(self, low: T, high: T) -> bool:
        """Check whether any interval intersects [low, high]."""
        return any(True for _ in self._search(low, lambda i: i.overlaps(low, high)))

    # --- Accessors ---

    def size(self) -> int:
        """Get number of intervals in the tree."""
        return self._size

    def is_empty(self) -> bool:
        """Check if tree is empty."""
        return self._root is None

    def height(self) -> int:
        """Get tree height (0 when empty)."""
        return _height(self._root)

    def _in_order(self) -> Iterator[Node[T]]:
        stack: list[Node[T]] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def entries(self) -> list[Entry]:
        """Get all entries in ascending low-bound order."""
        return list(self)

    def to_string(self) -> str:
        """
        List intervals in ascending low-bound order.

        Returns:
            Concatenation of "[low, high] " for every interval
        """
        return "".join(f"{node.interval} " for node in self._in_order())

    def __iter__(self) -> Iterator[Entry]:
        for node in self._in_order():
            yield Entry(node.interval, node.payload)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"IntervalTree(size={self._size}, height={self.height()})"

    # --- Debug Tool ---

    def verify(self) -> None:
        """
        Check every structural invariant of the tree.

        Balance is only checked while no unbalanced removal has happened
        since the last clear().

        Raises:
            RuntimeError: On the first violation found
        """
        count = 0

        def _walk(node: Optional[Node[T]], lower: Any, upper: Any) -> tuple[int, Any]:
            nonlocal count
            if node is None:
                return 0, None
            count += 1
            low = node.interval.low
            if node.interval.low > node.interval.high:
                raise RuntimeError(f"Inverted interval stored at {low}")
            if (lower is not None and low < lower) or (upper is not None and upper < low):
                raise RuntimeError(f"Ordering violation at {low}")

            left_h, left_max = _walk(node.left, lower, low)
            right_h, right_max = _walk(node.right, low, upper)

            if not self._may_be_unbalanced and abs(left_h - right_h) > 1:
                raise RuntimeError(f"AVL violation at {low}")

            expected_max = node.interval.high
            for m in (left_max, right_max):
                if m is not None and m > expected_max:
                    expected_max = m
            if node.max != expected_max:
                raise RuntimeError(f"Max violation at {low}")

            expected_height = 1 + max(left_h, right_h)
            if node.height != expected_height:
                raise RuntimeError(f"Height violation at {low}")
            return expected_height, expected_max

        _walk(self._root, None, None)
        if count != self._size:
            raise RuntimeError(f"Size is {self._size} but tree holds {count} nodes")
