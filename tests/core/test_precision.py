"""
Tests for component dtype configuration and tolerance tiers.
"""

import numpy as np
import pytest

from lwtensor.core.exceptions import ValidationError
from lwtensor.core.precision import (
    DEFAULT_DTYPE,
    EPSILON_32,
    EPSILON_64,
    machine_epsilon,
    resolve_dtype,
)
from lwtensor.core.tolerances import FP32, FP64, select_tolerance


class TestResolveDtype:

    def test_none_is_float64(self):
        assert resolve_dtype(None) == np.float64
        assert DEFAULT_DTYPE == np.float64

    @pytest.mark.parametrize("dtype_like", ["float32", np.float32, np.dtype("float32")])
    def test_float32_spellings(self, dtype_like):
        assert resolve_dtype(dtype_like) == np.float32

    def test_integer_dtype_rejected(self):
        with pytest.raises(ValidationError, match="unsupported component type int64"):
            resolve_dtype(np.int64)

    def test_float16_rejected(self):
        with pytest.raises(ValidationError, match="unsupported"):
            resolve_dtype("float16")

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="not a valid dtype"):
            resolve_dtype("no-such-type")


class TestMachineEpsilon:

    def test_constants(self):
        assert EPSILON_64 == machine_epsilon(np.float64)
        assert EPSILON_32 == machine_epsilon(np.float32)
        assert EPSILON_32 > EPSILON_64


class TestSelectTolerance:

    def test_float64_tier(self):
        assert select_tolerance(np.float64) is FP64

    def test_float32_tier(self):
        assert select_tolerance(np.float32) is FP32

    def test_single_precision_is_looser(self):
        assert FP32.rtol > FP64.rtol
        assert FP32.atol > FP64.atol
        assert FP32.singular_rtol > FP64.singular_rtol

    def test_singular_threshold_tracks_epsilon(self):
        assert FP64.singular_rtol == pytest.approx(1e4 * EPSILON_64)
        assert FP32.singular_rtol == pytest.approx(10 * EPSILON_32)

    def test_round_trip_tolerance(self):
        assert FP64.rtol <= 1e-9
