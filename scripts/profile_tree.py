"""
Profiling script for augtree query performance.

Times the interval tree against the flat SortedIntervalIndex baseline and
prints a cProfile breakdown of the tree's hottest paths.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from augtree import Interval, IntervalTree, SortedIntervalIndex


def create_intervals(n, span=1_000_000, max_length=500):
    """Create n random intervals inside [0, span)."""
    np.random.seed(42)
    lows = np.random.randint(0, span, size=n)
    highs = lows + np.random.randint(0, max_length, size=n)
    return lows, highs


def create_queries(n, span=1_000_000, max_length=2000):
    np.random.seed(7)
    lows = np.random.randint(0, span, size=n)
    highs = lows + np.random.randint(0, max_length, size=n)
    return list(zip(lows.tolist(), highs.tolist()))


def build_index(lows, highs):
    index = SortedIntervalIndex()
    for low, high in zip(lows.tolist(), highs.tolist()):
        index.insert(low, high)
    return index


def run_queries(target, queries):
    hits = 0
    for low, high in queries:
        hits += len(target.overlapping(low, high))
        hits += len(target.containing(low))
    return hits


def profile_build(n):
    """Profile bulk loading n intervals."""
    lows, highs = create_intervals(n)
    return IntervalTree.from_arrays(lows, highs)


def profile_queries(tree, queries):
    """Profile overlap and containment queries."""
    return run_queries(tree, queries)


def profile_churn(tree, lows, highs, rounds=2000):
    """Profile interleaved removal and reinsertion."""
    for low, high in zip(lows[:rounds].tolist(), highs[:rounds].tolist()):
        tree.remove(Interval(low, high))
        tree.insert(low + 1, high + 1)


def benchmark(n_values=(1000, 10000, 50000), n_queries=2000):
    """Compare tree and baseline timings for several sizes."""
    print("\n" + "=" * 70)
    print("TIMING BENCHMARKS")
    print("=" * 70)
    queries = create_queries(n_queries)

    for n in n_values:
        lows, highs = create_intervals(n)

        start = time.perf_counter()
        tree = IntervalTree.from_arrays(lows, highs)
        tree_build = time.perf_counter() - start

        start = time.perf_counter()
        index = build_index(lows, highs)
        index_build = time.perf_counter() - start

        start = time.perf_counter()
        tree_hits = run_queries(tree, queries)
        tree_query = time.perf_counter() - start

        start = time.perf_counter()
        index_hits = run_queries(index, queries)
        index_query = time.perf_counter() - start

        assert tree_hits == index_hits
        print(f"\nn={n:>6}  height={tree.height()}")
        print(f"  build  tree {tree_build * 1000:8.1f}ms   sorted list {index_build * 1000:8.1f}ms")
        print(f"  query  tree {tree_query * 1000:8.1f}ms   sorted list {index_query * 1000:8.1f}ms")


def main():
    print("=" * 70)
    print("PROFILING AUGTREE INTERVAL TREE")
    print("=" * 70)

    benchmark()

    lows, highs = create_intervals(20000)
    queries = create_queries(5000)

    profiler = cProfile.Profile()
    profiler.enable()
    tree = profile_build(20000)
    profile_queries(tree, queries)
    profile_churn(tree, lows, highs)
    profiler.disable()

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(25)
    print(s.getvalue())


if __name__ == "__main__":
    main()
