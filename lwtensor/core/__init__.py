"""
Core infrastructure for lwtensor.

This module provides the shared abstractions used by the tensor, vector
and matrix layers.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    precision: Component dtype configuration
    tolerances: Tolerance tiers for approximate comparison
"""

from lwtensor.core.exceptions import (
    LwTensorError,
    ValidationError,
    DimensionError,
    InvalidShapeError,
    ShapeMismatchError,
    IndexOutOfBoundsError,
    AllocationError,
    ReleasedTensorError,
    NumericalError,
    DivisionByZeroError,
    SingularMatrixError,
)
from lwtensor.core.precision import DEFAULT_DTYPE, SUPPORTED_DTYPES, resolve_dtype
from lwtensor.core.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Exceptions
    "LwTensorError",
    "ValidationError",
    "DimensionError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "IndexOutOfBoundsError",
    "AllocationError",
    "ReleasedTensorError",
    "NumericalError",
    "DivisionByZeroError",
    "SingularMatrixError",
    # Precision
    "DEFAULT_DTYPE",
    "SUPPORTED_DTYPES",
    "resolve_dtype",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
