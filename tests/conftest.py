"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from lwtensor import matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def upper_triangular():
    """identity(3) with m[0,1] = 2 and m[1,2] = 3; determinant 1."""
    return matrix([
        [1.0, 2.0, 0.0],
        [0.0, 1.0, 3.0],
        [0.0, 0.0, 1.0],
    ])


@pytest.fixture
def well_conditioned(rng):
    """Random 4x4 matrix shifted away from singularity."""
    a = rng.standard_normal((4, 4)) + 4.0 * np.eye(4)
    return matrix(a)


@pytest.fixture
def singular():
    """3x3 matrix whose third row is the sum of the first two."""
    return matrix([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [5.0, 7.0, 9.0],
    ])
