"""
Input validation utilities for lwtensor.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages

Checks that take tensors only rely on their ``rank`` and ``shape``
attributes, so this module does not import the tensor type.
"""

from numbers import Integral, Real
from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from lwtensor.core.exceptions import (
    DimensionError,
    DivisionByZeroError,
    IndexOutOfBoundsError,
    InvalidShapeError,
    ShapeMismatchError,
    ValidationError,
)


def _is_integer(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, (bool, np.bool_))


def check_shape(shape: Iterable[int], name: str = "shape") -> tuple[int, ...]:
    """
    Validate a shape declaration.

    Args:
        shape: Sequence of per-axis extents
        name: Parameter name for error messages

    Returns:
        The shape as a tuple of Python ints

    Raises:
        InvalidShapeError: If shape is not a sequence, or any extent is
            not a positive integer
    """
    if isinstance(shape, (str, bytes)) or not isinstance(shape, Iterable):
        raise InvalidShapeError(
            f"{name}: expected a sequence of positive integers, got {type(shape).__name__}"
        )

    dims = tuple(shape)
    for axis, dim in enumerate(dims):
        if not _is_integer(dim):
            raise InvalidShapeError(
                f"{name}: extent of axis {axis} must be an integer, got {dim!r}"
            )
        if dim <= 0:
            raise InvalidShapeError(
                f"{name}: extent of axis {axis} must be positive, got {dim}"
            )
    return tuple(int(d) for d in dims)


def check_indices(
    indices: Iterable[int],
    shape: tuple[int, ...],
    name: str = "indices",
) -> tuple[int, ...]:
    """
    Verify an index tuple addresses a component of a tensor of given shape.

    Args:
        indices: One index per axis
        shape: Shape of the addressed tensor
        name: Parameter name for error messages

    Returns:
        The indices as a tuple of Python ints

    Raises:
        IndexOutOfBoundsError: If the tuple has the wrong length, or any
            index is not an integer in [0, shape[axis])
    """
    if _is_integer(indices):
        indices = (indices,)
    elif isinstance(indices, (str, bytes)) or not isinstance(indices, Iterable):
        raise IndexOutOfBoundsError(
            f"{name}: expected a sequence of integers, got {type(indices).__name__}",
            shape=shape,
        )

    idx = tuple(indices)
    if len(idx) != len(shape):
        raise IndexOutOfBoundsError(
            f"{name}: expected {len(shape)} indices for shape {shape}, got {len(idx)}",
            indices=idx,
            shape=shape,
        )

    for axis, (i, extent) in enumerate(zip(idx, shape)):
        if not _is_integer(i):
            raise IndexOutOfBoundsError(
                f"{name}: index on axis {axis} must be an integer, got {i!r}",
                indices=idx,
                shape=shape,
            )
        if not 0 <= i < extent:
            raise IndexOutOfBoundsError(
                f"{name}: index {i} out of range [0, {extent}) on axis {axis}",
                indices=idx,
                shape=shape,
            )
    return tuple(int(i) for i in idx)


def check_components(values: ArrayLike, name: str = "components") -> NDArray[np.floating[Any]]:
    """
    Validate and convert component data to a numpy array.

    Rejects inputs that result in object dtype (indicating mixed types or
    non-numeric data), non-numeric dtypes and complex data.

    Args:
        values: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with a floating dtype

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(values)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype}, expected real data")

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_scalar(value: Any, name: str = "scalar") -> float:
    """
    Verify a scalar operand is a real number.

    Raises:
        ValidationError: If value is not a real number
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, Real):
        raise ValidationError(f"{name}: expected a real number, got {value!r}")
    return float(value)


def check_rank(tensor: Any, rank: int, name: str) -> None:
    """
    Verify a tensor has exactly the specified rank.

    Raises:
        DimensionError: If the tensor has the wrong rank
    """
    if tensor.rank != rank:
        raise DimensionError(
            f"{name}: expected rank {rank}, got rank {tensor.rank} with shape {tensor.shape}"
        )


def check_same_shape(lhs: Any, rhs: Any, names: tuple[str, str] = ("lhs", "rhs")) -> None:
    """
    Verify two tensors have identical shapes.

    Raises:
        ShapeMismatchError: If the shapes differ
    """
    if lhs.shape != rhs.shape:
        raise ShapeMismatchError(
            f"Shape mismatch: {names[0]}={lhs.shape}, {names[1]}={rhs.shape}"
        )


def check_same_length(lhs: Any, rhs: Any, names: tuple[str, str] = ("lhs", "rhs")) -> None:
    """
    Verify two tensors hold the same number of components.

    Shapes may differ; only the flattened length matters.

    Raises:
        ShapeMismatchError: If the lengths differ
    """
    n_lhs = int(np.prod(lhs.shape, dtype=np.int64))
    n_rhs = int(np.prod(rhs.shape, dtype=np.int64))
    if n_lhs != n_rhs:
        raise ShapeMismatchError(
            f"Length mismatch: {names[0]} has {n_lhs} components, {names[1]} has {n_rhs}"
        )


def check_square(matrix: Any, name: str) -> int:
    """
    Verify a matrix is square.

    Returns:
        The order n of the n x n matrix

    Raises:
        InvalidShapeError: If rows != cols
    """
    rows, cols = matrix.shape
    if rows != cols:
        raise InvalidShapeError(
            f"{name}: expected a square matrix, got shape ({rows}, {cols})"
        )
    return rows


def check_nonzero_scalar(value: float, name: str = "scalar") -> None:
    """
    Verify a scalar divisor is nonzero.

    Raises:
        DivisionByZeroError: If value == 0
    """
    if value == 0:
        raise DivisionByZeroError(f"{name}: division by zero")


def check_nonzero_components(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify no component of a divisor is zero.

    Raises:
        DivisionByZeroError: If any component is zero; the error carries
            the flat offset of the first one
    """
    zeros = np.flatnonzero(array == 0)
    if len(zeros) > 0:
        raise DivisionByZeroError(
            f"{name}: {len(zeros)} zero component(s), first at flat offset {zeros[0]}",
            position=int(zeros[0]),
        )
