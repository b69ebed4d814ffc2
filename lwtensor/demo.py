"""
Example driver: double inversion of a 3x3 upper-triangular matrix.

Run with ``python -m lwtensor``.
"""

from __future__ import annotations

import sys
from typing import TextIO

from lwtensor.matrix import Matrix, identity, inverse
from lwtensor.tensor import destroy


def print_matrix(m: Matrix, out: TextIO) -> None:
    """Write every entry as '%f ' in row-major order, one line per row."""
    rows, cols = m.shape
    for r in range(rows):
        for c in range(cols):
            out.write("%f " % m[r, c])
        out.write("\n")


def main(out: TextIO | None = None) -> int:
    out = sys.stdout if out is None else out

    m = identity(3)
    m[0, 1] = 2.0
    m[1, 2] = 3.0
    print_matrix(m, out)

    inv = inverse(m)
    m2 = inverse(inv)

    out.write("\n")
    print_matrix(m2, out)

    destroy(m)
    destroy(m2)
    destroy(inv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
