"""
Rank-2 tensors and elementary matrix algebra.

A matrix is a Tensor of rank 2 with shape (rows, cols), stored row-major.
Determinants are computed by recursive Laplace expansion along the first
column and inverses from the adjugate, which is exact in structure but
O(n!) in cost: these routines are meant for the small, dense matrices of
geometric computation, not for large systems.

Public API:
    create_matrix(rows, cols), identity(n), matrix(rows)
    row(m, r), column(m, c)
    matmul(lhs, rhs), transform(v, m), transpose(m)
    minor, cofactor, cofactor_matrix, adjugate
    determinant(m), inverse(m)
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from lwtensor.core.exceptions import (
    InvalidShapeError,
    ShapeMismatchError,
    SingularMatrixError,
)
from lwtensor.core.tolerances import select_tolerance
from lwtensor.core.validation import check_indices, check_rank, check_square
from lwtensor.tensor import Tensor, check_tensor, create, scale

Matrix = Tensor


# ═══════════════════════════════════════════════════════════════════════
# Helpers on 2D numpy views
# ═══════════════════════════════════════════════════════════════════════


def _as_2d(m: Matrix, name: str) -> NDArray[np.floating[Any]]:
    """Shaped view of a rank-2 tensor's buffer."""
    check_rank(check_tensor(m, name), 2, name)
    return m.buffer().reshape(m.shape)


def _as_square(m: Matrix, name: str) -> NDArray[np.floating[Any]]:
    a = _as_2d(m, name)
    check_square(m, name)
    return a


def _from_2d(array: NDArray[np.floating[Any]]) -> Matrix:
    """New matrix owning a row-major copy of a 2D array."""
    rows, cols = array.shape
    return Tensor._wrap((int(rows), int(cols)), array.flatten())


def _submatrix(a: NDArray, row: int, col: int) -> NDArray:
    return np.delete(np.delete(a, row, axis=0), col, axis=1)


def _determinant(a: NDArray) -> float:
    n = a.shape[0]
    if n == 1:
        return float(a[0, 0])
    if n == 2:
        return float(a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0])

    # Laplace expansion along column 0
    total = 0.0
    for r in range(n):
        total += float(a[r, 0]) * _cofactor(a, r, 0)
    return total


def _cofactor(a: NDArray, row: int, col: int) -> float:
    sign = -1.0 if (row + col) % 2 else 1.0
    return sign * _determinant(_submatrix(a, row, col))


def _cofactor_array(a: NDArray) -> NDArray:
    n = a.shape[0]
    if n == 1:
        # The minor of a 1x1 matrix is the empty determinant, 1
        return np.ones((1, 1), dtype=a.dtype)

    out = np.empty_like(a)
    for r in range(n):
        for c in range(n):
            out[r, c] = _cofactor(a, r, c)
    return out


def _check_minor_position(m: Matrix, row: int, col: int) -> NDArray:
    a = _as_square(m, "m")
    if a.shape[0] < 2:
        raise InvalidShapeError(
            f"m: a minor needs at least a 2x2 matrix, got shape {m.shape}"
        )
    check_indices((row, col), m.shape, "(row, col)")
    return a


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


def create_matrix(rows: int, cols: int, *, dtype: Any = None) -> Matrix:
    """Zero matrix of shape (rows, cols)."""
    return create((rows, cols), dtype=dtype)


def identity(n: int, *, dtype: Any = None) -> Matrix:
    """n x n matrix with 1.0 on the main diagonal and 0.0 elsewhere."""
    m = create_matrix(n, n, dtype=dtype)
    np.fill_diagonal(m.buffer().reshape(m.shape), 1.0)
    return m


def matrix(rows: ArrayLike, *, dtype: Any = None) -> Matrix:
    """
    Matrix from nested row sequences.

    Raises:
        DimensionError: If the input is not two-dimensional
    """
    m = Tensor.from_array(rows, dtype=dtype)
    check_rank(m, 2, "rows")
    return m


def row(m: Matrix, r: int) -> Tensor:
    """Row r as a new vector of length cols."""
    a = _as_2d(m, "m")
    (r,) = check_indices((r,), m.shape[:1], "row")
    return Tensor._wrap((a.shape[1],), a[r, :].copy())


def column(m: Matrix, c: int) -> Tensor:
    """Column c as a new vector of length rows."""
    a = _as_2d(m, "m")
    (c,) = check_indices((c,), m.shape[1:], "column")
    return Tensor._wrap((a.shape[0],), a[:, c].copy())


# ═══════════════════════════════════════════════════════════════════════
# Products
# ═══════════════════════════════════════════════════════════════════════


def matmul(lhs: Matrix, rhs: Matrix) -> Matrix:
    """
    Matrix product lhs @ rhs.

    Entry (r, c) of the result is sum_k lhs[r, k] * rhs[k, c].

    Raises:
        DimensionError: If either operand is not a matrix
        ShapeMismatchError: If lhs.cols != rhs.rows
    """
    a = _as_2d(lhs, "lhs")
    b = _as_2d(rhs, "rhs")
    if a.shape[1] != b.shape[0]:
        raise ShapeMismatchError(
            f"matmul: lhs has {a.shape[1]} columns but rhs has {b.shape[0]} rows "
            f"(shapes {lhs.shape} and {rhs.shape})"
        )
    return _from_2d(a @ b)


def transform(v: Tensor, m: Matrix) -> Tensor:
    """
    Apply m to the vector v: result[r] = dot(row r of m, v).

    Raises:
        ShapeMismatchError: If m.cols != len(v)
    """
    a = _as_2d(m, "m")
    check_rank(check_tensor(v, "v"), 1, "v")
    if a.shape[1] != v.shape[0]:
        raise ShapeMismatchError(
            f"transform: m has {a.shape[1]} columns but v has {v.shape[0]} components"
        )
    return Tensor._wrap((a.shape[0],), a @ v.buffer())


def transpose(m: Matrix) -> Matrix:
    """Matrix of shape (cols, rows) with result[c, r] = m[r, c]."""
    return _from_2d(_as_2d(m, "m").T)


# ═══════════════════════════════════════════════════════════════════════
# Minors, cofactors, determinant, inverse
# ═══════════════════════════════════════════════════════════════════════


def minor(m: Matrix, row: int, col: int) -> float:
    """
    Determinant of m with the given row and column deleted.

    Raises:
        InvalidShapeError: If m is not square or is smaller than 2x2
        IndexOutOfBoundsError: If row or col is out of range
    """
    a = _check_minor_position(m, row, col)
    return _determinant(_submatrix(a, row, col))


def cofactor(m: Matrix, row: int, col: int) -> float:
    """Signed minor (-1)**(row + col) * minor(m, row, col)."""
    a = _check_minor_position(m, row, col)
    return _cofactor(a, row, col)


def cofactor_matrix(m: Matrix) -> Matrix:
    """
    Matrix of all cofactors, same shape as m.

    Raises:
        InvalidShapeError: If m is not square
    """
    return _from_2d(_cofactor_array(_as_square(m, "m")))


def adjugate(m: Matrix) -> Matrix:
    """Transpose of the cofactor matrix."""
    return _from_2d(_cofactor_array(_as_square(m, "m")).T)


def determinant(m: Matrix) -> float:
    """
    Determinant by recursive Laplace expansion along column 0.

    Raises:
        DimensionError: If m is not a matrix
        InvalidShapeError: If m is not square
    """
    return _determinant(_as_square(m, "m"))


def inverse(m: Matrix) -> Matrix:
    """
    Inverse as adjugate(m) scaled by 1 / determinant(m).

    Emits a RuntimeWarning when the determinant is nonzero but negligible
    next to the product of the row norms (Hadamard's bound on |det|); the
    result is then dominated by rounding error.

    Raises:
        InvalidShapeError: If m is not square
        SingularMatrixError: If determinant(m) == 0
    """
    a = _as_square(m, "m")
    n = a.shape[0]
    det = _determinant(a)

    if det == 0:
        raise SingularMatrixError(
            f"m: {n}x{n} matrix is singular (determinant is 0)",
            matrix_name="m",
            determinant=det,
            order=n,
        )

    tier = select_tolerance(a.dtype)
    bound = float(np.prod(np.linalg.norm(a, axis=1)))
    if abs(det) <= tier.singular_rtol * bound:
        warnings.warn(
            f"Matrix is nearly singular: |det| = {abs(det):.3e} against a "
            f"Hadamard bound of {bound:.3e}. The inverse may be inaccurate.",
            RuntimeWarning,
            stacklevel=2,
        )

    return scale(_from_2d(_cofactor_array(a).T), 1.0 / det)
