"""Tests for type-minimum sentinels."""

import math

import numpy as np
import pytest
from augtree.limits import type_minimum


class TestTypeMinimum:
    """Test type_minimum helper."""

    def test_python_int(self):
        """Test Python ints map to the int64 minimum."""
        assert type_minimum(5) == -(2 ** 63)
        assert isinstance(type_minimum(5), int)

    def test_python_float(self):
        """Test Python floats map to negative infinity."""
        assert type_minimum(1.5) == -math.inf

    def test_numpy_integers(self):
        """Test numpy integer scalars keep their dtype."""
        m = type_minimum(np.int32(7))
        assert m == np.iinfo(np.int32).min
        assert m.dtype == np.int32
        assert type_minimum(np.int8(0)) == -128
        assert type_minimum(np.uint16(3)) == 0

    def test_numpy_float(self):
        """Test numpy float scalars map to negative infinity."""
        m = type_minimum(np.float32(1.0))
        assert np.isneginf(m)
        assert m.dtype == np.float32

    def test_rejects_bool(self):
        """Test bool is not treated as a number."""
        with pytest.raises(TypeError):
            type_minimum(True)

    def test_rejects_non_numeric(self):
        """Test non-numeric types raise."""
        with pytest.raises(TypeError):
            type_minimum("a")
        with pytest.raises(TypeError):
            type_minimum(np.str_("a"))
