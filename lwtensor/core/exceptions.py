"""
Exception hierarchy for lwtensor.

All exceptions inherit from LwTensorError to allow catching any
library-specific error. Each one also inherits the closest builtin
exception, so callers that only know about IndexError or
ZeroDivisionError still catch what they expect.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class LwTensorError(Exception):
    """Base exception for all lwtensor errors."""
    pass


class ValidationError(LwTensorError, ValueError):
    """
    Input validation failed.

    Raised when user-provided inputs (shapes, indices, components)
    fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Tensor has the wrong rank for an operation.

    Raised, for example, when a vector operation receives a matrix.
    """
    pass


class InvalidShapeError(DimensionError):
    """
    Shape is not acceptable.

    Raised when a dimension is not a positive integer, when a
    square-only operation receives a non-square matrix, or when a
    minor is requested from a matrix smaller than 2x2.
    """
    pass


class ShapeMismatchError(DimensionError):
    """
    Operands have incompatible shapes.

    Raised by element-wise operations on tensors of different shape and
    by products whose inner dimensions disagree.
    """
    pass


class IndexOutOfBoundsError(ValidationError, IndexError):
    """
    Index tuple does not address a component.

    Attributes:
        indices: The offending index tuple
        shape: Shape of the tensor being addressed
    """

    def __init__(
        self,
        message: str,
        indices: tuple[int, ...] | None = None,
        shape: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.indices = indices
        self.shape = shape


class AllocationError(LwTensorError, MemoryError):
    """Component storage could not be obtained."""
    pass


class ReleasedTensorError(LwTensorError, RuntimeError):
    """
    Tensor was used after destroy().

    The storage of a destroyed tensor is gone; reading or writing it is a
    programming error.
    """
    pass


class NumericalError(LwTensorError, ArithmeticError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DivisionByZeroError(NumericalError, ZeroDivisionError):
    """
    A scalar or component denominator is zero.

    Attributes:
        position: Flat offset of the first zero denominator, or None
                  when the divisor is a scalar
    """

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when an operation requires invertibility but the matrix
    has a zero determinant.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        determinant: The determinant that was computed, if available
        order: Number of rows (= columns) of the matrix
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        determinant: float | None = None,
        order: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.determinant = determinant
        self.order = order
