"""
Steel Estimation Module
Estimates reinforcement steel using one of three methods:
1. Cutting length x unit weight (D²/162.2) - beams, columns and slabs
2. Bar area x assumed bar length x density - quick / project desk members
3. Percentage of concrete volume - when bar detail is unavailable

The methods are independent approximations and are never mixed within
one result. Cutting lengths follow IS 456:2000 site practice.
"""

import logging
import math
from typing import Optional

from .models import (
    BeamInputs,
    ColumnInputs,
    ElementSteelResult,
    ElementType,
    SlabInputs,
    SteelLine,
    StructuralElement,
)

logger = logging.getLogger(__name__)


STEEL_DENSITY_KG_M3 = 7850

# Nominal mass formula for reinforcement bars: kg/m = D² / 162.2
UNIT_WEIGHT_DIVISOR = 162.2

# End allowances, as multiples of bar diameter at each end
MAIN_BAR_BEND_ALLOWANCE = 9  # development/bend, beam main bars
HOOK_ALLOWANCE = 10          # 135° hook, stirrups and ties

# IS 1786 nominal sizes (mm)
NOMINAL_DIAMETERS = (8, 10, 12, 16, 20, 25, 32)


def unit_weight_per_meter(diameter_mm: float) -> float:
    """
    Mass per metre of a bar (kg/m), D² / 162.2.

    Returns 0 for a non-positive diameter.
    """
    if not diameter_mm > 0:
        return 0.0
    return (diameter_mm * diameter_mm) / UNIT_WEIGHT_DIVISOR


# Standard TMT bar weights (kg/m) for the nominal sizes
BAR_WEIGHTS = {dia: round(unit_weight_per_meter(dia), 3) for dia in NOMINAL_DIAMETERS}


def steel_bar_area(count: float, diameter_mm: float) -> float:
    """
    Cross-sectional area (mm²) of `count` bars of one diameter.

    Returns 0 if count <= 0 or diameter <= 0.
    """
    if not count > 0 or not diameter_mm > 0:
        return 0.0
    radius = diameter_mm / 2
    return count * math.pi * radius ** 2


def steel_weight_from_area(total_area_mm2: float, assumed_bar_length_m: float) -> float:
    """
    Steel weight (kg) from total bar area and an assumed bar length.

    The bar length is taken as member length x quantity; this is an
    approximation, not a bar bending schedule.
    """
    if not total_area_mm2 > 0 or not assumed_bar_length_m > 0:
        return 0.0
    volume_m3 = (total_area_mm2 / 1e6) * assumed_bar_length_m
    return volume_m3 * STEEL_DENSITY_KG_M3


def steel_weight_from_percentage(concrete_volume_m3: float, steel_percent: float) -> float:
    """Steel weight (kg) as a percentage of concrete volume."""
    if not concrete_volume_m3 > 0 or not steel_percent > 0:
        return 0.0
    return concrete_volume_m3 * (steel_percent / 100) * STEEL_DENSITY_KG_M3


def _missing(**values: float) -> list:
    """Names of inputs that are zero, negative or NaN."""
    return [name for name, value in values.items() if not value > 0]


def _steel_line(description: str, dia: float, count: float, cutting_length_m: float) -> SteelLine:
    total_length = cutting_length_m * count
    return SteelLine(
        description=description,
        bar_dia=dia,
        bar_count=count,
        cutting_length_m=cutting_length_m,
        total_length_m=total_length,
        weight_kg=total_length * unit_weight_per_meter(dia)
    )


def _link_cutting_length(width_mm: float, depth_mm: float, cover_mm: float, dia_mm: float) -> float:
    """Closed stirrup/tie length (m): perimeter inside cover plus two hooks."""
    a = width_mm - 2 * cover_mm
    b = depth_mm - 2 * cover_mm
    return (2 * a + 2 * b + 2 * HOOK_ALLOWANCE * dia_mm) / 1000


def _fencepost_count(span_m: float, spacing_mm: float) -> float:
    """Bars along a span, counting both ends."""
    return (span_m * 1000 / spacing_mm) + 1


def _links_fit(width_mm: float, depth_mm: float, cover_mm: float) -> bool:
    return width_mm - 2 * cover_mm > 0 and depth_mm - 2 * cover_mm > 0


def beam_steel_weight(inputs: BeamInputs) -> Optional[ElementSteelResult]:
    """
    Steel take-off for a beam.

    Main bars: L - 2c + 2 x 9d per bar.
    Stirrups: (2a + 2b + 2 x 10d) per stirrup at (L / s) + 1 nos.

    Returns:
        ElementSteelResult, or None if any input is missing or <= 0
    """
    missing = _missing(
        length=inputs.length, width=inputs.width, depth=inputs.depth,
        cover=inputs.cover, main_bar_dia=inputs.main_bar_dia,
        main_bar_count=inputs.main_bar_count, stirrup_dia=inputs.stirrup_dia,
        stirrup_spacing=inputs.stirrup_spacing
    )
    if missing:
        logger.debug(f"Beam calculation withheld, incomplete: {', '.join(missing)}")
        return None
    if not _links_fit(inputs.width, inputs.depth, inputs.cover):
        logger.debug("Beam calculation withheld, cover exceeds section")
        return None

    main_cutting = (
        inputs.length
        - (2 * inputs.cover / 1000)
        + (2 * MAIN_BAR_BEND_ALLOWANCE * inputs.main_bar_dia / 1000)
    )
    if main_cutting <= 0:
        logger.debug("Beam calculation withheld, cover exceeds span")
        return None

    main = _steel_line(
        f"Main Bars ({inputs.main_bar_dia:g} mm)",
        inputs.main_bar_dia, inputs.main_bar_count, main_cutting
    )

    stirrups = _steel_line(
        f"Stirrups ({inputs.stirrup_dia:g} mm)",
        inputs.stirrup_dia,
        _fencepost_count(inputs.length, inputs.stirrup_spacing),
        _link_cutting_length(inputs.width, inputs.depth, inputs.cover, inputs.stirrup_dia)
    )

    return ElementSteelResult(
        element_type=ElementType.BEAM,
        main_bars=main,
        secondary=stirrups,
        total_kg=main.weight_kg + stirrups.weight_kg
    )


def column_steel_weight(inputs: ColumnInputs) -> Optional[ElementSteelResult]:
    """
    Steel take-off for a column.

    Main bars run the full height with no bends. Lateral ties use the
    stirrup formula, spaced over the height.
    """
    missing = _missing(
        height=inputs.height, width=inputs.width, depth=inputs.depth,
        cover=inputs.cover, main_bar_dia=inputs.main_bar_dia,
        main_bar_count=inputs.main_bar_count, tie_dia=inputs.tie_dia,
        tie_spacing=inputs.tie_spacing
    )
    if missing:
        logger.debug(f"Column calculation withheld, incomplete: {', '.join(missing)}")
        return None
    if not _links_fit(inputs.width, inputs.depth, inputs.cover):
        logger.debug("Column calculation withheld, cover exceeds section")
        return None

    main = _steel_line(
        f"Main Bars ({inputs.main_bar_dia:g} mm)",
        inputs.main_bar_dia, inputs.main_bar_count, inputs.height
    )

    ties = _steel_line(
        f"Lateral Ties ({inputs.tie_dia:g} mm)",
        inputs.tie_dia,
        _fencepost_count(inputs.height, inputs.tie_spacing),
        _link_cutting_length(inputs.width, inputs.depth, inputs.cover, inputs.tie_dia)
    )

    return ElementSteelResult(
        element_type=ElementType.COLUMN,
        main_bars=main,
        secondary=ties,
        total_kg=main.weight_kg + ties.weight_kg
    )


def slab_steel_weight(inputs: SlabInputs) -> Optional[ElementSteelResult]:
    """
    Steel take-off for a two-way reinforced slab.

    Main bars span the width and are spaced along the length;
    distribution bars span the length and are spaced along the width.
    """
    missing = _missing(
        length=inputs.length, width=inputs.width, cover=inputs.cover,
        main_bar_dia=inputs.main_bar_dia, main_bar_spacing=inputs.main_bar_spacing,
        dist_bar_dia=inputs.dist_bar_dia, dist_bar_spacing=inputs.dist_bar_spacing
    )
    if missing:
        logger.debug(f"Slab calculation withheld, incomplete: {', '.join(missing)}")
        return None

    main_cutting = inputs.width - (2 * inputs.cover / 1000)
    dist_cutting = inputs.length - (2 * inputs.cover / 1000)
    if main_cutting <= 0 or dist_cutting <= 0:
        logger.debug("Slab calculation withheld, cover exceeds panel size")
        return None

    main = _steel_line(
        f"Main Bars ({inputs.main_bar_dia:g} mm)",
        inputs.main_bar_dia,
        _fencepost_count(inputs.length, inputs.main_bar_spacing),
        main_cutting
    )

    distribution = _steel_line(
        f"Distribution Bars ({inputs.dist_bar_dia:g} mm)",
        inputs.dist_bar_dia,
        _fencepost_count(inputs.width, inputs.dist_bar_spacing),
        dist_cutting
    )

    return ElementSteelResult(
        element_type=ElementType.SLAB,
        main_bars=main,
        secondary=distribution,
        total_kg=main.weight_kg + distribution.weight_kg
    )


def element_steel_weight(element: StructuralElement) -> Optional[ElementSteelResult]:
    """Run the take-off matching the element's variant."""
    if isinstance(element, BeamInputs):
        return beam_steel_weight(element)
    if isinstance(element, ColumnInputs):
        return column_steel_weight(element)
    if isinstance(element, SlabInputs):
        return slab_steel_weight(element)
    raise TypeError(f"Unsupported structural element: {type(element).__name__}")
