"""
Type-minimum sentinels for numeric bound types.

IntervalTree.max_high_overlapping returns None when nothing overlaps. Callers
that want the older behaviour of getting the smallest value of the bound type
instead can pass type_minimum(sample) as the default.
"""

from typing import Any
import numpy as np

_INT64 = np.dtype(np.int64)


def _dtype_minimum(dtype: np.dtype) -> Any:
    if np.issubdtype(dtype, np.integer):
        return dtype.type(np.iinfo(dtype).min)
    if np.issubdtype(dtype, np.floating):
        return dtype.type(-np.inf)
    raise TypeError(f"No minimum value for dtype {dtype}")


def type_minimum(sample: Any) -> Any:
    """
    Get the smallest representable value of the numeric type of sample.

    Args:
        sample: A value of the bound type (Python int/float or numpy scalar)

    Returns:
        Minimum value of the same type as sample. Python ints map to the
        int64 minimum since they are unbounded.

    Raises:
        TypeError: If sample is not a numeric scalar
    """
    if isinstance(sample, (bool, np.bool_)):
        raise TypeError("bool has no meaningful minimum sentinel")
    if isinstance(sample, np.generic):
        return _dtype_minimum(sample.dtype)
    if isinstance(sample, int):
        return int(np.iinfo(_INT64).min)
    if isinstance(sample, float):
        return float("-inf")
    raise TypeError(f"No minimum value for type {type(sample).__name__}")
