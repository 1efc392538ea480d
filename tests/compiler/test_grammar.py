# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the grammar pieces shared by both backends."""

import pytest

from teeny.compiler.grammar import format_number

# ###############
# Number Formatting
# ###############


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3.0, "3"),
            (-12.0, "-12"),
            (0.0, "0"),
            (-0.0, "-0"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (2.5, "2.5"),
            (0.1, "0.1"),
            (-0.75, "-0.75"),
            (1.5e300, "1.5e+300"),
        ],
    )
    def test_finite_values(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.0001, "0.0001"),
            (0.00001, "0.00001"),
            (0.000001, "0.000001"),
            (-0.0000025, "-0.0000025"),
            (0.0000001, "1e-7"),
            (1.5e-7, "1.5e-7"),
            (-2e-10, "-2e-10"),
        ],
    )
    def test_small_magnitudes(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(float("inf"), "Infinity"), (float("-inf"), "-Infinity"), (float("nan"), "NaN")],
    )
    def test_non_finite_values(self, value: float, expected: str) -> None:
        assert format_number(value) == expected
