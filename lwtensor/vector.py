"""
Rank-1 tensors.

A vector is a Tensor of rank 1; there is no separate type. Every function
here checks the rank of its operands and raises DimensionError otherwise.
"""

from __future__ import annotations

import math
from typing import Any, Iterable

import numpy as np

from lwtensor.core.exceptions import DivisionByZeroError, ShapeMismatchError
from lwtensor.core.validation import check_components, check_rank, check_scalar
from lwtensor.tensor import Tensor, check_tensor, create, from_flat

Vector = Tensor


def create_vector(n: int, *, dtype: Any = None) -> Vector:
    """Zero vector with n components."""
    return create((n,), dtype=dtype)


def vector(values: Iterable[float], *, dtype: Any = None) -> Vector:
    """Vector holding the given components, in order."""
    components = check_components(list(values), "values")
    if components.ndim != 1:
        raise ShapeMismatchError(
            f"values: expected a flat sequence, got shape {components.shape}"
        )
    return from_flat((components.size,), components, dtype=dtype)


def from_components(c0: float, c1: float, c2: float) -> Vector:
    """3-vector (c0, c1, c2)."""
    return from_flat(
        (3,),
        [check_scalar(c0, "c0"), check_scalar(c1, "c1"), check_scalar(c2, "c2")],
    )


def norm(v: Vector) -> float:
    """
    Euclidean norm sqrt(sum(v[i]**2)); never negative.

    Components are scaled by the largest magnitude before squaring, so the
    result neither overflows nor underflows while the true norm fits in a
    float.
    """
    check_rank(check_tensor(v, "v"), 1, "v")
    data = v.buffer()
    peak = float(np.max(np.abs(data)))
    if peak == 0.0 or not math.isfinite(peak):
        return peak
    scaled = data / peak
    return peak * float(np.sqrt(np.sum(scaled * scaled)))


def normalize(v: Vector) -> Vector:
    """
    Unit vector in the direction of v.

    Raises:
        DivisionByZeroError: If v is the zero vector
    """
    magnitude = norm(v)
    if magnitude == 0:
        raise DivisionByZeroError(f"v: cannot normalize a zero vector of length {v.shape[0]}")
    data = v.buffer()
    return Tensor._wrap(v.shape, (data / magnitude).astype(data.dtype, copy=False))


def cross(u: Vector, v: Vector) -> Vector:
    """
    Right-handed cross product of two 3-vectors.

    Raises:
        DimensionError: If either operand is not a vector
        ShapeMismatchError: If either operand does not have 3 components
    """
    check_rank(check_tensor(u, "u"), 1, "u")
    check_rank(check_tensor(v, "v"), 1, "v")
    for name, operand in (("u", u), ("v", v)):
        if operand.shape[0] != 3:
            raise ShapeMismatchError(
                f"{name}: cross product needs 3 components, got {operand.shape[0]}"
            )

    u0, u1, u2 = u.buffer()
    v0, v1, v2 = v.buffer()
    return from_flat(
        (3,),
        [u1 * v2 - u2 * v1, u2 * v0 - u0 * v2, u0 * v1 - u1 * v0],
        dtype=np.result_type(u.dtype, v.dtype),
    )
