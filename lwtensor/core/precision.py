"""
Numerical precision constants and utilities.

Components are stored in one of two IEEE floating types. float64 is the
default; float32 halves the storage of large tensors at the cost of
precision.
"""

import numpy as np

from lwtensor.core.exceptions import ValidationError


# Default component type
DEFAULT_DTYPE = np.dtype(np.float64)

SUPPORTED_DTYPES: tuple[np.dtype, ...] = (
    np.dtype(np.float32),
    np.dtype(np.float64),
)


def resolve_dtype(dtype: np.dtype | type | str | None) -> np.dtype:
    """
    Normalize a user-supplied component type.

    Args:
        dtype: Anything numpy accepts as a dtype, or None for the default

    Returns:
        One of SUPPORTED_DTYPES

    Raises:
        ValidationError: If dtype is not a supported floating type
    """
    if dtype is None:
        return DEFAULT_DTYPE
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"dtype: not a valid dtype: {dtype!r}") from e
    if resolved not in SUPPORTED_DTYPES:
        supported = ", ".join(str(d) for d in SUPPORTED_DTYPES)
        raise ValidationError(
            f"dtype: unsupported component type {resolved}, expected one of {supported}"
        )
    return resolved


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """Get machine epsilon for a given dtype."""
    return float(np.finfo(dtype).eps)


# Machine epsilon for float64
EPSILON_64: float = machine_epsilon(np.float64)  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = machine_epsilon(np.float32)  # ~1.19e-7
