"""
Tests for dropletgen/design/interpolate.
Run from project root: python -m pytest tests/test_interpolate.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from dropletgen.design.interpolate import interpolate_range


def test_five_steps_over_zero_to_ten():
    assert interpolate_range(0, 10, 5) == [0, 2.5, 5, 7.5, 10]


@pytest.mark.parametrize("steps", [1, 0, -3])
def test_single_or_fewer_steps_returns_min(steps):
    assert interpolate_range(0, 10, steps) == [0]


def test_values_rounded_to_three_decimals():
    assert interpolate_range(0, 1, 4) == [0.0, 0.333, 0.667, 1.0]


def test_endpoints_are_exact():
    values = interpolate_range(0.1, 10, 7)
    assert values[0] == 0.1
    assert values[-1] == 10
    assert len(values) == 7


def test_decreasing_range_is_not_rejected():
    assert interpolate_range(10, 0, 3) == [10, 5, 0]


def test_degenerate_range():
    assert interpolate_range(4, 4, 3) == [4, 4, 4]
