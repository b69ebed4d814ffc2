"""
Tests for the example driver.
"""

import io

import pytest

from lwtensor.demo import main, print_matrix
from lwtensor import matrix


def _parse_block(block):
    return [[float(x) for x in line.split()] for line in block.strip("\n").split("\n")]


class TestPrintMatrix:

    def test_format(self):
        out = io.StringIO()
        print_matrix(matrix([[1.0, 2.5], [-3.0, 0.0]]), out)
        assert out.getvalue() == "1.000000 2.500000 \n-3.000000 0.000000 \n"


class TestMain:

    def test_exit_status(self):
        assert main(io.StringIO()) == 0

    def test_prints_original_matrix(self):
        out = io.StringIO()
        main(out)
        first, _ = out.getvalue().split("\n\n")
        assert first + "\n" == (
            "1.000000 2.000000 0.000000 \n"
            "0.000000 1.000000 3.000000 \n"
            "0.000000 0.000000 1.000000 \n"
        )

    def test_double_inverse_restores_matrix(self):
        out = io.StringIO()
        main(out)
        first, second = out.getvalue().split("\n\n")
        original = _parse_block(first)
        restored = _parse_block(second)
        assert len(restored) == 3
        for row_a, row_b in zip(original, restored):
            assert row_b == pytest.approx(row_a, abs=1e-6)

    def test_writes_to_stdout_by_default(self, capsys):
        assert main() == 0
        assert capsys.readouterr().out.startswith("1.000000 2.000000 0.000000 \n")
