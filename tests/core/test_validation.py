"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_shape: positive integer extents
    - check_indices: index tuple length and range
    - check_components: conversion, dtype coercion, non-numeric rejection
    - check_scalar: real numbers only
    - check_rank / check_same_shape / check_same_length / check_square
    - check_nonzero_scalar / check_nonzero_components
"""

import numpy as np
import pytest

from lwtensor import create
from lwtensor.core.exceptions import (
    DimensionError,
    DivisionByZeroError,
    IndexOutOfBoundsError,
    InvalidShapeError,
    ShapeMismatchError,
    ValidationError,
)
from lwtensor.core.validation import (
    check_components,
    check_indices,
    check_nonzero_components,
    check_nonzero_scalar,
    check_rank,
    check_same_length,
    check_same_shape,
    check_scalar,
    check_shape,
    check_square,
)


# ═══════════════════════════════════════════════════════════════════════
# check_shape
# ═══════════════════════════════════════════════════════════════════════


class TestCheckShape:
    """check_shape accepts sequences of positive integers only."""

    def test_tuple_passthrough(self):
        assert check_shape((2, 3)) == (2, 3)

    def test_list_becomes_tuple(self):
        assert check_shape([4]) == (4,)

    def test_numpy_integers_accepted(self):
        shape = check_shape(np.array([2, 5]))
        assert shape == (2, 5)
        assert all(type(d) is int for d in shape)

    def test_empty_shape_is_rank_zero(self):
        assert check_shape(()) == ()

    def test_zero_extent_rejected(self):
        with pytest.raises(InvalidShapeError, match="axis 1 must be positive, got 0"):
            check_shape((3, 0))

    def test_negative_extent_rejected(self):
        with pytest.raises(InvalidShapeError, match="positive"):
            check_shape((-1,))

    def test_float_extent_rejected(self):
        with pytest.raises(InvalidShapeError, match="integer"):
            check_shape((2.0, 3))

    def test_bool_extent_rejected(self):
        with pytest.raises(InvalidShapeError, match="integer"):
            check_shape((True,))

    def test_bare_int_rejected(self):
        with pytest.raises(InvalidShapeError, match="sequence"):
            check_shape(3)

    def test_string_rejected(self):
        with pytest.raises(InvalidShapeError, match="sequence"):
            check_shape("33")

    def test_error_message_includes_name(self):
        with pytest.raises(InvalidShapeError, match="my_shape"):
            check_shape((0,), "my_shape")


# ═══════════════════════════════════════════════════════════════════════
# check_indices
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndices:
    """check_indices enforces one in-range integer per axis."""

    def test_valid_indices(self):
        assert check_indices((1, 2), (2, 3)) == (1, 2)

    def test_single_int_for_rank_one(self):
        assert check_indices(4, (5,)) == (4,)

    def test_index_equal_to_extent_rejected(self):
        with pytest.raises(IndexOutOfBoundsError, match=r"index 3 out of range \[0, 3\)"):
            check_indices((3, 0), (3, 3))

    def test_negative_index_rejected(self):
        with pytest.raises(IndexOutOfBoundsError):
            check_indices((-1,), (3,))

    def test_too_few_indices(self):
        with pytest.raises(IndexOutOfBoundsError, match="expected 2 indices.*got 1"):
            check_indices((0,), (2, 2))

    def test_too_many_indices(self):
        with pytest.raises(IndexOutOfBoundsError, match="expected 1 indices.*got 2"):
            check_indices((0, 0), (2,))

    def test_non_integer_index_rejected(self):
        with pytest.raises(IndexOutOfBoundsError, match="integer"):
            check_indices((0.5,), (2,))

    def test_error_carries_diagnostics(self):
        with pytest.raises(IndexOutOfBoundsError) as exc_info:
            check_indices((0, 7), (2, 3))
        assert exc_info.value.indices == (0, 7)
        assert exc_info.value.shape == (2, 3)


# ═══════════════════════════════════════════════════════════════════════
# check_components / check_scalar
# ═══════════════════════════════════════════════════════════════════════


class TestCheckComponents:
    """check_components converts to a floating ndarray."""

    def test_int_list_promoted_to_float(self):
        result = check_components([1, 2, 3])
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float32_preserved(self):
        result = check_components(np.ones(2, dtype=np.float32))
        assert result.dtype == np.float32

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_components([None, 1, 2.0])

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_components(["a", "b"])

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="complex"):
            check_components([1 + 2j])

    def test_error_message_includes_name(self):
        with pytest.raises(ValidationError, match="my_values"):
            check_components(["x"], "my_values")


class TestCheckScalar:

    def test_int_becomes_float(self):
        assert check_scalar(3) == 3.0
        assert isinstance(check_scalar(3), float)

    def test_numpy_scalar(self):
        assert check_scalar(np.float32(0.5)) == 0.5

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="real number"):
            check_scalar(True)

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="real number"):
            check_scalar("1.0")


# ═══════════════════════════════════════════════════════════════════════
# Tensor shape checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckRank:

    def test_matching_rank_passes(self):
        check_rank(create((2, 2)), 2, "m")

    def test_wrong_rank_raises(self):
        with pytest.raises(DimensionError, match=r"expected rank 1, got rank 2 with shape \(2, 3\)"):
            check_rank(create((2, 3)), 1, "v")


class TestCheckSameShape:

    def test_equal_shapes_pass(self):
        check_same_shape(create((2, 3)), create((2, 3)))

    def test_transposed_shapes_differ(self):
        with pytest.raises(ShapeMismatchError, match=r"lhs=\(2, 3\), rhs=\(3, 2\)"):
            check_same_shape(create((2, 3)), create((3, 2)))


class TestCheckSameLength:

    def test_different_shapes_same_length_pass(self):
        check_same_length(create((2, 3)), create((6,)))

    def test_different_lengths_raise(self):
        with pytest.raises(ShapeMismatchError, match="6 components.*5"):
            check_same_length(create((2, 3)), create((5,)))


class TestCheckSquare:

    def test_square_returns_order(self):
        assert check_square(create((4, 4)), "m") == 4

    def test_non_square_raises(self):
        with pytest.raises(InvalidShapeError, match=r"square.*\(2, 3\)"):
            check_square(create((2, 3)), "m")


# ═══════════════════════════════════════════════════════════════════════
# Division guards
# ═══════════════════════════════════════════════════════════════════════


class TestNonzero:

    def test_nonzero_scalar_passes(self):
        check_nonzero_scalar(1e-300)

    def test_zero_scalar_raises(self):
        with pytest.raises(DivisionByZeroError):
            check_nonzero_scalar(0.0)

    def test_negative_zero_raises(self):
        with pytest.raises(DivisionByZeroError):
            check_nonzero_scalar(-0.0)

    def test_nonzero_components_pass(self):
        check_nonzero_components(np.array([1.0, -2.0]), "rhs")

    def test_first_zero_position_reported(self):
        with pytest.raises(DivisionByZeroError, match="2 zero component") as exc_info:
            check_nonzero_components(np.array([1.0, 0.0, 3.0, 0.0]), "rhs")
        assert exc_info.value.position == 1
