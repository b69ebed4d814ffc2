"""
Tolerance tiers for approximate comparison.

Defines precision expectations for each component type:
- FP64: round-trips such as inverse(inverse(m)) agree to ~1e-9
- FP32: relaxed for single-precision arithmetic

Used by allclose(), by the near-singularity warning in inverse(), and by
the test suite.
"""

from dataclasses import dataclass

import numpy as np

from lwtensor.core.precision import EPSILON_32, EPSILON_64


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    singular_rtol: float
    name: str
    description: str


# Double precision
FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    singular_rtol=1e4 * EPSILON_64,
    name='fp64',
    description='double precision components',
)

# Single precision
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    singular_rtol=10 * EPSILON_32,
    name='fp32',
    description='single precision components',
)


def select_tolerance(dtype: np.dtype | type = np.float64) -> ToleranceTier:
    """Select appropriate tolerance tier for a given component dtype."""
    if np.dtype(dtype) == np.dtype(np.float32):
        return FP32
    return FP64
