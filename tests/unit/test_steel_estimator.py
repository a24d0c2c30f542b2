"""
Unit tests for steel estimation module
"""

import math

import pytest

from sitecalc.structural.models import (
    BeamInputs,
    ColumnInputs,
    ElementType,
    SlabInputs,
)
from sitecalc.structural.steel_estimator import (
    BAR_WEIGHTS,
    STEEL_DENSITY_KG_M3,
    beam_steel_weight,
    column_steel_weight,
    element_steel_weight,
    slab_steel_weight,
    steel_bar_area,
    steel_weight_from_area,
    steel_weight_from_percentage,
    unit_weight_per_meter,
)


def make_beam(**overrides):
    values = dict(
        length=6.0, width=230, depth=450, cover=25,
        main_bar_dia=16, main_bar_count=4,
        stirrup_dia=8, stirrup_spacing=200
    )
    values.update(overrides)
    return BeamInputs(**values)


def make_column(**overrides):
    values = dict(
        height=3.0, width=300, depth=450, cover=40,
        main_bar_dia=16, main_bar_count=6,
        tie_dia=8, tie_spacing=150
    )
    values.update(overrides)
    return ColumnInputs(**values)


def make_slab(**overrides):
    values = dict(
        length=4.0, width=3.0, thickness=125, cover=20,
        main_bar_dia=10, main_bar_spacing=150,
        dist_bar_dia=8, dist_bar_spacing=200
    )
    values.update(overrides)
    return SlabInputs(**values)


@pytest.mark.unit
class TestBarArea:
    """Test steel_bar_area"""

    @pytest.mark.parametrize("count,dia", [(1, 8), (4, 16), (6, 20), (3, 32), (2, 12.5)])
    def test_area_formula(self, count, dia):
        assert steel_bar_area(count, dia) == pytest.approx(count * math.pi * (dia / 2) ** 2)

    def test_four_20mm_bars(self):
        assert steel_bar_area(4, 20) == pytest.approx(1256.637, rel=1e-6)

    @pytest.mark.parametrize("count,dia", [(0, 16), (4, 0), (-2, 16), (4, -10), (0, 0)])
    def test_zero_or_negative_gives_zero(self, count, dia):
        assert steel_bar_area(count, dia) == 0


@pytest.mark.unit
class TestUnitWeight:
    """Test D²/162.2 unit weight"""

    def test_16mm(self):
        assert unit_weight_per_meter(16) == pytest.approx(1.578, abs=1e-3)

    def test_8mm(self):
        assert unit_weight_per_meter(8) == pytest.approx(0.395, abs=1e-3)

    def test_matches_formula(self):
        assert unit_weight_per_meter(25) == 25 * 25 / 162.2

    def test_non_positive(self):
        assert unit_weight_per_meter(0) == 0
        assert unit_weight_per_meter(-12) == 0

    def test_bar_weight_table(self):
        assert BAR_WEIGHTS[8] == 0.395
        assert BAR_WEIGHTS[12] == 0.888
        assert BAR_WEIGHTS[16] == 1.578
        assert BAR_WEIGHTS[32] == 6.313


@pytest.mark.unit
class TestAreaAndPercentageMethods:
    """Test the two approximate weight methods"""

    def test_weight_from_area(self):
        # 1000 mm² over 10 m = 0.01 m³
        assert steel_weight_from_area(1000, 10) == pytest.approx(0.01 * STEEL_DENSITY_KG_M3)

    def test_weight_from_area_zero_length(self):
        assert steel_weight_from_area(1256.6, 0) == 0

    def test_weight_from_percentage(self):
        assert steel_weight_from_percentage(2.0, 1.0) == pytest.approx(2.0 * 0.01 * 7850)

    def test_weight_from_percentage_zero(self):
        assert steel_weight_from_percentage(0, 2.0) == 0
        assert steel_weight_from_percentage(2.0, 0) == 0

    def test_methods_differ(self):
        """Area and percentage methods are independent approximations"""
        volume = 0.3 * 0.3 * 3.0
        by_area = steel_weight_from_area(steel_bar_area(4, 20), 3.0)
        by_percent = steel_weight_from_percentage(volume, 1.0)
        assert by_area != pytest.approx(by_percent)


@pytest.mark.unit
class TestBeamSteel:
    """Test beam take-off against the worked example"""

    def test_main_bars(self):
        result = beam_steel_weight(make_beam())

        assert result.main_bars.cutting_length_m == pytest.approx(6.238)
        assert result.main_bars.total_length_m == pytest.approx(24.952)
        assert result.main_bars.weight_kg == pytest.approx(24.952 * 256 / 162.2)
        assert result.main_bars.weight_kg == pytest.approx(39.37, abs=0.05)

    def test_stirrups(self):
        result = beam_steel_weight(make_beam())

        assert result.stirrups.cutting_length_m == pytest.approx(1.32)
        assert result.stirrups.bar_count == pytest.approx(31)
        assert result.stirrups.total_length_m == pytest.approx(40.92)
        assert result.stirrups.weight_kg == pytest.approx(16.16, abs=0.05)

    def test_total_is_sum(self):
        result = beam_steel_weight(make_beam())
        assert result.total_kg == pytest.approx(result.main_bars.weight_kg + result.stirrups.weight_kg)
        assert result.element_type == ElementType.BEAM
        assert result.ties is None

    def test_descriptions(self):
        result = beam_steel_weight(make_beam())
        assert result.main_bars.description == "Main Bars (16 mm)"
        assert result.stirrups.description == "Stirrups (8 mm)"

    @pytest.mark.parametrize("field", [
        "length", "width", "depth", "cover", "main_bar_dia",
        "main_bar_count", "stirrup_dia", "stirrup_spacing"
    ])
    @pytest.mark.parametrize("value", [0, -1])
    def test_withheld_on_non_positive(self, field, value):
        assert beam_steel_weight(make_beam(**{field: value})) is None

    def test_withheld_logs_missing_fields(self, caplog):
        beam_steel_weight(make_beam(cover=0, stirrup_spacing=0))
        assert "incomplete: cover, stirrup_spacing" in caplog.text

    def test_withheld_on_nan(self):
        assert beam_steel_weight(make_beam(stirrup_spacing=float('nan'))) is None

    def test_withheld_when_cover_exceeds_section(self):
        assert beam_steel_weight(make_beam(cover=120)) is None

    def test_idempotent(self):
        inputs = make_beam()
        assert beam_steel_weight(inputs) == beam_steel_weight(inputs)


@pytest.mark.unit
class TestColumnSteel:
    """Test column take-off"""

    def test_main_bars_have_no_end_allowance(self):
        result = column_steel_weight(make_column())
        assert result.main_bars.cutting_length_m == 3.0
        assert result.main_bars.total_length_m == pytest.approx(18.0)
        assert result.main_bars.weight_kg == pytest.approx(18.0 * 256 / 162.2)

    def test_ties(self):
        result = column_steel_weight(make_column())
        # a = 300 - 80 = 220, b = 450 - 80 = 370
        expected_length = (2 * 220 + 2 * 370 + 2 * 10 * 8) / 1000
        assert result.ties.cutting_length_m == pytest.approx(expected_length)
        assert result.ties.bar_count == pytest.approx(3000 / 150 + 1)
        assert result.ties.description == "Lateral Ties (8 mm)"
        assert result.stirrups is None

    def test_total(self):
        result = column_steel_weight(make_column())
        assert result.total_kg == pytest.approx(result.main_bars.weight_kg + result.ties.weight_kg)

    @pytest.mark.parametrize("field", [
        "height", "width", "depth", "cover", "main_bar_dia",
        "main_bar_count", "tie_dia", "tie_spacing"
    ])
    @pytest.mark.parametrize("value", [0, -1])
    def test_withheld(self, field, value):
        assert column_steel_weight(make_column(**{field: value})) is None

    def test_withheld_when_cover_exceeds_section(self):
        assert column_steel_weight(make_column(cover=150)) is None


@pytest.mark.unit
class TestSlabSteel:
    """Test slab take-off"""

    def test_main_bars(self):
        result = slab_steel_weight(make_slab())
        assert result.main_bars.cutting_length_m == pytest.approx(3.0 - 0.04)
        assert result.main_bars.bar_count == pytest.approx(4000 / 150 + 1)
        assert result.main_bars.weight_kg == pytest.approx(
            2.96 * (4000 / 150 + 1) * 100 / 162.2
        )

    def test_distribution_bars(self):
        result = slab_steel_weight(make_slab())
        assert result.distribution_bars.cutting_length_m == pytest.approx(3.96)
        assert result.distribution_bars.bar_count == pytest.approx(16)
        assert result.distribution_bars.total_length_m == pytest.approx(3.96 * 16)

    def test_thickness_not_required(self):
        assert slab_steel_weight(make_slab(thickness=0)) is not None

    @pytest.mark.parametrize("field", [
        "length", "width", "cover", "main_bar_dia", "main_bar_spacing",
        "dist_bar_dia", "dist_bar_spacing"
    ])
    @pytest.mark.parametrize("value", [0, -1])
    def test_withheld(self, field, value):
        assert slab_steel_weight(make_slab(**{field: value})) is None


@pytest.mark.unit
class TestElementDispatch:
    """Test element_steel_weight dispatch"""

    def test_dispatch(self):
        assert element_steel_weight(make_beam()).element_type == ElementType.BEAM
        assert element_steel_weight(make_column()).element_type == ElementType.COLUMN
        assert element_steel_weight(make_slab()).element_type == ElementType.SLAB

    def test_unknown_element(self):
        with pytest.raises(TypeError):
            element_steel_weight({"length": 3})

    def test_to_dict_uses_element_label(self):
        data = element_steel_weight(make_slab()).to_dict()
        assert data['element_type'] == 'slab'
        assert 'distribution_bars' in data
        assert data['total_kg'] > 0
