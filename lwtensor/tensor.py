"""
Dense N-dimensional tensors.

A Tensor owns a flat, row-major component buffer and a fixed shape. The
last axis varies fastest: a tensor of shape (d0, d1, ..., dk) addresses
component (i0, i1, ..., ik) at flat offset sum(i_a * stride_a) with
stride_a = d_{a+1} * ... * d_k.

Every arithmetic function returns a new tensor that shares no storage with
its operands. Only set_value() (or item assignment) modifies a tensor in
place.

Public API:
    Tensor                      - the array type
    create(shape)               - zero tensor
    from_flat(shape, values)    - tensor from a flat component sequence
    copy(t)                     - deep copy
    get_value / set_value       - strided element access
    length(t)                   - number of components
    add, subtract, divide, hadamard_product
    add_scalar, subtract_scalar, divide_scalar, scale
    dot(lhs, rhs)               - flat dot product
    allclose(lhs, rhs)          - approximate equality
    destroy(t)                  - release storage
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Callable, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from lwtensor.core.exceptions import (
    AllocationError,
    ReleasedTensorError,
    ShapeMismatchError,
    ValidationError,
)
from lwtensor.core.precision import resolve_dtype
from lwtensor.core.tolerances import ToleranceTier, select_tolerance
from lwtensor.core.validation import (
    check_components,
    check_indices,
    check_nonzero_components,
    check_nonzero_scalar,
    check_same_length,
    check_same_shape,
    check_scalar,
    check_shape,
)


def _row_major_strides(shape: tuple[int, ...]) -> tuple[int, ...]:
    strides = []
    step = 1
    for dim in reversed(shape):
        strides.append(step)
        step *= dim
    return tuple(reversed(strides))


def _allocate(n: int, dtype: np.dtype) -> NDArray[np.floating[Any]]:
    try:
        return np.zeros(n, dtype=dtype)
    except (MemoryError, ValueError, OverflowError) as e:
        raise AllocationError(
            f"cannot allocate {n} components of type {dtype}: {e}"
        ) from e


class Tensor:
    """
    Dense, fixed-shape, row-major array of floating-point components.

    Shape and rank are fixed at construction. The flat component buffer is
    exclusively owned by the tensor; the ``components`` property exposes a
    read-only view of it.

    Construction:
        Tensor((2, 3))                    # zeros
        Tensor((3,), dtype='float32')
        Tensor.from_array([[1, 2], [3, 4]])

    A tensor is also a context manager that releases its storage on exit:

        with create((3, 3)) as t:
            ...
    """

    __slots__ = ('_shape', '_strides', '_data')

    def __init__(self, shape: Iterable[int], *, dtype: Any = None):
        dims = check_shape(shape)
        self._shape = dims
        self._strides = _row_major_strides(dims)
        self._data: NDArray[np.floating[Any]] | None = _allocate(
            math.prod(dims), resolve_dtype(dtype)
        )

    @classmethod
    def _wrap(cls, shape: tuple[int, ...], data: NDArray[np.floating[Any]]) -> Tensor:
        """Adopt an already validated flat buffer without copying."""
        tensor = cls.__new__(cls)
        tensor._shape = shape
        tensor._strides = _row_major_strides(shape)
        tensor._data = data
        return tensor

    @classmethod
    def from_array(cls, array: ArrayLike, *, dtype: Any = None) -> Tensor:
        """
        Build a tensor from nested sequences or a numpy array.

        The rank and shape are those of the array. float32 input keeps
        its precision unless dtype says otherwise; any other numeric
        input becomes float64.
        """
        values = check_components(array, "array")
        if dtype is None:
            dtype = values.dtype if values.dtype == np.float32 else None
        shape = check_shape(values.shape, "array shape")
        data = np.array(values, dtype=resolve_dtype(dtype)).reshape(-1)
        return cls._wrap(shape, data)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    @property
    def rank(self) -> int:
        """Number of dimensions."""
        return len(self._shape)

    @property
    def shape(self) -> tuple[int, ...]:
        """Per-axis extents."""
        return self._shape

    @property
    def strides(self) -> tuple[int, ...]:
        """Per-axis multipliers converting a multi-index into a flat offset."""
        return self._strides

    @property
    def dtype(self) -> np.dtype:
        return self.buffer().dtype

    @property
    def components(self) -> NDArray[np.floating[Any]]:
        """Read-only view of the flat component buffer."""
        view = self.buffer().view()
        view.flags.writeable = False
        return view

    @property
    def released(self) -> bool:
        """Whether destroy() has been called on this tensor."""
        return self._data is None

    def buffer(self) -> NDArray[np.floating[Any]]:
        """
        The flat component buffer itself.

        Raises:
            ReleasedTensorError: If the tensor has been destroyed
        """
        if self._data is None:
            raise ReleasedTensorError(
                f"tensor of shape {self._shape} was used after destroy()"
            )
        return self._data

    def offset(self, indices: Iterable[int]) -> int:
        """Flat offset of a multi-index, after bounds checking."""
        idx = check_indices(indices, self._shape)
        return sum(i * s for i, s in zip(idx, self._strides))

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Shaped copy of the components as a numpy array."""
        return self.buffer().reshape(self._shape).copy()

    def tolist(self) -> Any:
        return self.to_numpy().tolist()

    def release(self) -> None:
        self._data = None

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __enter__(self) -> Tensor:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    # numpy operands defer to the reflected operators below
    __array_ufunc__ = None

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        """
        Shaped copy of the components.

        The buffer is never shared with numpy, so copy=False raises.
        """
        if copy is False:
            raise ValueError(
                "Tensor components cannot be exposed without a copy; "
                "use the read-only 'components' view instead"
            )
        array = self.to_numpy()
        return array if dtype is None else array.astype(dtype, copy=False)

    def __getitem__(self, indices: Any) -> float:
        return get_value(self, indices)

    def __setitem__(self, indices: Any, value: float) -> None:
        set_value(self, value, indices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and bool(
            np.array_equal(self.buffer(), other.buffer())
        )

    __hash__ = None  # type: ignore[assignment]

    def __neg__(self) -> Tensor:
        return scale(self, -1.0)

    def __add__(self, other: Any) -> Tensor:
        if isinstance(other, Tensor):
            return add(self, other)
        if isinstance(other, Real):
            return add_scalar(self, other)
        return NotImplemented

    def __radd__(self, other: Any) -> Tensor:
        if isinstance(other, Real):
            return add_scalar(self, other)
        return NotImplemented

    def __sub__(self, other: Any) -> Tensor:
        if isinstance(other, Tensor):
            return subtract(self, other)
        if isinstance(other, Real):
            return subtract_scalar(self, other)
        return NotImplemented

    def __rsub__(self, other: Any) -> Tensor:
        if isinstance(other, Real):
            return add_scalar(scale(self, -1.0), other)
        return NotImplemented

    def __mul__(self, other: Any) -> Tensor:
        if isinstance(other, Tensor):
            return hadamard_product(self, other)
        if isinstance(other, Real):
            return scale(self, other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Tensor:
        if isinstance(other, Real):
            return scale(self, other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Tensor:
        if isinstance(other, Tensor):
            return divide(self, other)
        if isinstance(other, Real):
            return divide_scalar(self, other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        from lwtensor.matrix import matmul
        return matmul(self, other)

    def __repr__(self) -> str:
        if self._data is None:
            return f"Tensor(shape={self._shape}, released)"
        return f"Tensor(shape={self._shape}, dtype={self._data.dtype}, components={self._data.tolist()})"


# ═══════════════════════════════════════════════════════════════════════
# Construction and access
# ═══════════════════════════════════════════════════════════════════════


def check_tensor(value: Any, name: str) -> Tensor:
    if not isinstance(value, Tensor):
        raise ValidationError(f"{name}: expected a Tensor, got {type(value).__name__}")
    return value


def create(shape: Iterable[int], *, dtype: Any = None) -> Tensor:
    """
    Create a zero-initialized tensor.

    Args:
        shape: Sequence of positive per-axis extents; its length is the rank
        dtype: Component type, float64 (default) or float32

    Raises:
        InvalidShapeError: If any extent is not a positive integer
        AllocationError: If the component buffer cannot be allocated
    """
    return Tensor(shape, dtype=dtype)


def from_flat(shape: Iterable[int], components: ArrayLike, *, dtype: Any = None) -> Tensor:
    """
    Create a tensor from a flat, row-major sequence of components.

    Raises:
        InvalidShapeError: If any extent is not a positive integer
        ShapeMismatchError: If the number of components is not product(shape)
    """
    dims = check_shape(shape)
    values = check_components(components).reshape(-1)
    expected = math.prod(dims)
    if values.size != expected:
        raise ShapeMismatchError(
            f"components: shape {dims} needs {expected} components, got {values.size}"
        )
    return Tensor._wrap(dims, np.array(values, dtype=resolve_dtype(dtype)))


def copy(tensor: Tensor) -> Tensor:
    """Deep copy: the result shares nothing with the input."""
    t = check_tensor(tensor, "tensor")
    return Tensor._wrap(t.shape, t.buffer().copy())


def get_value(tensor: Tensor, indices: Iterable[int]) -> float:
    """
    Read the component at a multi-index.

    Raises:
        IndexOutOfBoundsError: If len(indices) != rank or any index is
            outside [0, shape[axis])
    """
    t = check_tensor(tensor, "tensor")
    return float(t.buffer()[t.offset(indices)])


def set_value(tensor: Tensor, value: float, indices: Iterable[int]) -> None:
    """
    Write the component at a multi-index in place.

    Raises:
        IndexOutOfBoundsError: If len(indices) != rank or any index is
            outside [0, shape[axis])
        ValidationError: If value is not a real number
    """
    t = check_tensor(tensor, "tensor")
    number = check_scalar(value, "value")
    t.buffer()[t.offset(indices)] = number


def length(tensor: Tensor) -> int:
    """Number of components, product(shape)."""
    return math.prod(check_tensor(tensor, "tensor").shape)


def destroy(tensor: Tensor) -> None:
    """
    Release the tensor's storage.

    Later use of the tensor raises ReleasedTensorError. Destroying twice
    is harmless.
    """
    check_tensor(tensor, "tensor").release()


# ═══════════════════════════════════════════════════════════════════════
# Element-wise arithmetic
# ═══════════════════════════════════════════════════════════════════════


def _elementwise(
    lhs: Tensor,
    rhs: Tensor,
    op: Callable[[NDArray, NDArray], NDArray],
) -> Tensor:
    check_tensor(lhs, "lhs")
    check_tensor(rhs, "rhs")
    check_same_shape(lhs, rhs)
    return Tensor._wrap(lhs.shape, op(lhs.buffer(), rhs.buffer()))


def _with_scalar(
    tensor: Tensor,
    scalar: float,
    op: Callable[[NDArray, float], NDArray],
) -> Tensor:
    t = check_tensor(tensor, "tensor")
    number = check_scalar(scalar)
    data = t.buffer()
    return Tensor._wrap(t.shape, op(data, number).astype(data.dtype, copy=False))


def add(lhs: Tensor, rhs: Tensor) -> Tensor:
    """Element-wise sum. Raises ShapeMismatchError unless shapes are equal."""
    return _elementwise(lhs, rhs, np.add)


def subtract(lhs: Tensor, rhs: Tensor) -> Tensor:
    """Element-wise difference lhs - rhs."""
    return _elementwise(lhs, rhs, np.subtract)


def divide(lhs: Tensor, rhs: Tensor) -> Tensor:
    """
    Element-wise quotient lhs / rhs.

    Raises:
        ShapeMismatchError: If shapes differ
        DivisionByZeroError: If any component of rhs is zero
    """
    check_tensor(rhs, "rhs")
    check_same_shape(check_tensor(lhs, "lhs"), rhs)
    check_nonzero_components(rhs.buffer(), "rhs")
    return _elementwise(lhs, rhs, np.divide)


def hadamard_product(lhs: Tensor, rhs: Tensor) -> Tensor:
    """Element-wise product."""
    return _elementwise(lhs, rhs, np.multiply)


def add_scalar(tensor: Tensor, scalar: float) -> Tensor:
    return _with_scalar(tensor, scalar, np.add)


def subtract_scalar(tensor: Tensor, scalar: float) -> Tensor:
    return _with_scalar(tensor, scalar, np.subtract)


def divide_scalar(tensor: Tensor, scalar: float) -> Tensor:
    """
    Divide every component by a scalar.

    Raises:
        DivisionByZeroError: If scalar == 0
    """
    check_nonzero_scalar(check_scalar(scalar), "scalar")
    return _with_scalar(tensor, scalar, np.divide)


def scale(tensor: Tensor, scalar: float) -> Tensor:
    """Multiply every component by a scalar."""
    return _with_scalar(tensor, scalar, np.multiply)


def dot(lhs: Tensor, rhs: Tensor) -> float:
    """
    Dot product of two tensors viewed as flat sequences.

    Shapes may differ as long as the total lengths agree.

    Raises:
        ShapeMismatchError: If the lengths differ
    """
    check_tensor(lhs, "lhs")
    check_tensor(rhs, "rhs")
    check_same_length(lhs, rhs)
    return float(np.dot(lhs.buffer(), rhs.buffer()))


def allclose(lhs: Tensor, rhs: Tensor, tolerance: ToleranceTier | None = None) -> bool:
    """
    Approximate equality: same shape and |lhs - rhs| <= atol + rtol * |rhs|.

    Args:
        lhs, rhs: Tensors to compare
        tolerance: Tier to use; by default the tier of the less precise
            operand dtype

    Returns:
        False for tensors of different shape, otherwise the comparison
    """
    check_tensor(lhs, "lhs")
    check_tensor(rhs, "rhs")
    if lhs.shape != rhs.shape:
        return False
    if tolerance is None:
        tiers = (select_tolerance(lhs.dtype), select_tolerance(rhs.dtype))
        tolerance = max(tiers, key=lambda tier: tier.rtol)
    return bool(np.allclose(
        lhs.buffer(), rhs.buffer(), rtol=tolerance.rtol, atol=tolerance.atol
    ))
