# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""Tests for rendering parameter vectors as CSS filters."""

import json

import pytest

from colorfilter.runtime import FilterFormat, FilterOperation, to_filter, to_operations
from colorfilter.schema import ParameterVector


NEUTRAL = ParameterVector(0, 0, 100, 0, 100, 100)


class TestOperations:

    def test_order_and_units(self):
        ops = to_operations(NEUTRAL)
        assert [op.name for op in ops] == [
            "invert", "sepia", "saturate", "hue-rotate", "brightness", "contrast",
        ]
        assert [op.unit for op in ops] == ["%", "%", "%", "deg", "%", "%"]

    def test_hue_converted_to_degrees(self):
        ops = to_operations(ParameterVector(0, 0, 100, 50, 100, 100))
        assert ops[3] == FilterOperation("hue-rotate", 180, "deg")

    def test_rounded_half_up(self):
        ops = to_operations(ParameterVector(12.5, 12.49, 1234.5, 0, 99.5, 100.4))
        assert [op.value for op in ops] == [13, 12, 1235, 0, 100, 100]

    def test_values_are_ints(self):
        ops = to_operations(ParameterVector(33.3, 66.6, 2500.7, 77.7, 150.2, 49.9))
        assert all(isinstance(op.value, int) for op in ops)

    def test_hue_rounding_after_conversion(self):
        # 33.4 units = 120.24 degrees
        assert to_operations(ParameterVector(0, 0, 100, 33.4, 100, 100))[3].value == 120


class TestToFilter:

    def test_css(self):
        assert to_filter(NEUTRAL) == (
            "invert(0%) sepia(0%) saturate(100%) hue-rotate(0deg) brightness(100%) contrast(100%)"
        )

    def test_declaration(self):
        out = to_filter(NEUTRAL, format=FilterFormat.DECLARATION)
        assert out.startswith("filter: invert(0%)")
        assert out.endswith("contrast(100%);")

    def test_json(self):
        data = json.loads(to_filter(ParameterVector(83, 43, 1095, 99.2, 104, 105), format=FilterFormat.JSON))
        assert data[0] == {"name": "invert", "value": 83, "unit": "%"}
        assert data[3] == {"name": "hue-rotate", "value": 357, "unit": "deg"}
        assert len(data) == 6

    def test_pure(self):
        p = ParameterVector(1.4, 2.6, 3.5, 4.4, 5.5, 6.6)
        assert to_filter(p) == to_filter(p)
        assert p.as_tuple() == (1.4, 2.6, 3.5, 4.4, 5.5, 6.6)

    @pytest.mark.parametrize("fmt", list(FilterFormat))
    def test_every_format_is_text(self, fmt):
        assert isinstance(to_filter(NEUTRAL, format=fmt), str)
