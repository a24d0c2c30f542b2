"""
Unit tests for input parsing and display formatting
"""

import pytest

from sitecalc.structural.formatting import (
    format_area,
    format_inr,
    format_volume,
    format_weight,
    group_indian,
)
from sitecalc.structural.models import RateConfig
from sitecalc.structural.units import (
    m_to_mm,
    mm_to_m,
    parse_count,
    parse_number,
    parse_rebar_callout,
)


@pytest.mark.unit
class TestParseNumber:
    """Test parse_number"""

    @pytest.mark.parametrize("text,expected", [
        ("0.23", 0.23),
        (" 8000 ", 8000.0),
        ("12mm", 12.0),
        (".5", 0.5),
        ("-3", -3.0),
        ("1e3", 1000.0),
        (16, 16.0),
        (2.5, 2.5),
    ])
    def test_valid(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", None, "nan", "inf", float('inf'), float('nan'), True])
    def test_invalid_reads_as_zero(self, text):
        assert parse_number(text) == 0.0


@pytest.mark.unit
class TestParseCount:
    """Test parse_count"""

    @pytest.mark.parametrize("text,expected", [
        ("4", 4), ("4.7", 4), ("10 nos", 10), (6, 6), (3.9, 3), ("", 0), ("x", 0), (None, 0)
    ])
    def test_parse(self, text, expected):
        assert parse_count(text) == expected


@pytest.mark.unit
class TestRebarCallout:
    """Test parse_rebar_callout"""

    def test_count_and_diameter(self):
        assert parse_rebar_callout("4Y16") == {'count': 4, 'diameter': 16}

    def test_spacing(self):
        assert parse_rebar_callout("Y8@200") == {'diameter': 8, 'spacing': 200}

    def test_both_ways(self):
        result = parse_rebar_callout("8-T12@150 B/W")
        assert result == {'count': 8, 'diameter': 12, 'spacing': 150, 'both_ways': True}

    def test_unrecognised(self):
        assert parse_rebar_callout("main bars") is None
        assert parse_rebar_callout("") is None


@pytest.mark.unit
class TestConversions:

    def test_mm_m(self):
        assert mm_to_m(25) == 0.025
        assert m_to_mm(6) == 6000

    def test_rates_from_form_text(self):
        rates = RateConfig.from_dict({
            'concrete_rate': '8000', 'steel_rate': '', 'concrete_labor_rate': 'n/a'
        })
        assert rates == RateConfig(8000, 0, 0, 0)


@pytest.mark.unit
class TestFormatting:
    """Test display formatting"""

    @pytest.mark.parametrize("value,expected", [
        (0, "0"), (999, "999"), (1000, "1,000"), (123456, "1,23,456"),
        (1234567, "12,34,567"), (-123456, "-1,23,456"),
    ])
    def test_indian_grouping(self, value, expected):
        assert group_indian(value) == expected

    def test_format_inr(self):
        assert format_inr(123456.7) == "₹ 1,23,457"
        assert format_inr(0.5) == "₹ 1"
        assert format_inr(float('nan')) == "₹ 0"

    def test_measurements(self):
        assert format_volume(1.08) == "1.080 m³"
        assert format_area(1256.637) == "1257 mm²"
        assert format_weight(39.3817) == "39.38 kg"
        assert format_weight(39.3817, decimals=0) == "39 kg"
