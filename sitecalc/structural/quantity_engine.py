"""
Quantity Computation Engine
Calculates concrete volumes, steel quantities and costs for RCC members
entered in the quick estimator and the project desk.
"""

import logging
import math
from typing import Iterable, Optional

from .models import Member, MemberQuantity, ProjectTotals, RateConfig, SteelMethod
from .steel_estimator import (
    steel_bar_area,
    steel_weight_from_area,
    steel_weight_from_percentage,
)

logger = logging.getLogger(__name__)


def member_concrete_volume(length: float, width: float, depth: float, quantity: float) -> float:
    """
    Concrete volume (m³) of `quantity` identical members.

    Negative dimensions are treated as 0.
    """
    factors = [max(0.0, float(v)) for v in (length, width, depth, quantity)]
    if not all(factors):
        return 0.0
    return factors[0] * factors[1] * factors[2] * factors[3]


def member_steel_area(member: Member) -> float:
    """Total bar area (mm²) across all bar groups of a member."""
    return math.fsum(steel_bar_area(g.count, g.diameter_mm) for g in member.bar_groups)


def member_quantities(
    member: Member,
    rates: RateConfig,
    method: SteelMethod = SteelMethod.AREA,
    steel_percent: Optional[float] = None
) -> MemberQuantity:
    """
    Quantities and costs for one member.

    Args:
        member: Member geometry and bars
        rates: Material and labour rates
        method: Steel weight method (bar area or % of concrete)
        steel_percent: Steel % of concrete volume, required for PERCENTAGE

    Returns:
        MemberQuantity
    """
    volume = member_concrete_volume(member.length, member.width, member.depth, member.quantity)
    area = member_steel_area(member)

    if method == SteelMethod.PERCENTAGE:
        if steel_percent is None:
            raise ValueError("steel_percent is required for the percentage method")
        weight = steel_weight_from_percentage(volume, steel_percent)
    else:
        # Bars assumed to run the member length, once per member
        assumed_length = max(0.0, member.length) * max(0, member.quantity)
        weight = steel_weight_from_area(area, assumed_length)

    return MemberQuantity(
        member_id=member.member_id,
        name=member.name,
        concrete_volume_m3=volume,
        steel_area_mm2=area,
        steel_weight_kg=weight,
        material_cost=volume * rates.concrete_rate + weight * rates.steel_rate,
        labor_cost=volume * rates.concrete_labor_rate + weight * rates.steel_labor_rate
    )


def project_totals(
    members: Iterable[Member],
    rates: RateConfig,
    method: SteelMethod = SteelMethod.AREA,
    steel_percent: Optional[float] = None
) -> ProjectTotals:
    """
    Aggregate quantities and costs over a member list.

    material = concrete x concrete rate + steel x steel rate
    labour   = concrete x concrete labour rate + steel x steel labour rate
    grand    = material + labour

    Sums use math.fsum so the totals do not depend on member order.
    """
    rows = [member_quantities(m, rates, method, steel_percent) for m in members]

    concrete = math.fsum(r.concrete_volume_m3 for r in rows)
    steel_area = math.fsum(r.steel_area_mm2 for r in rows)
    steel_weight = math.fsum(r.steel_weight_kg for r in rows)

    material_cost = concrete * rates.concrete_rate + steel_weight * rates.steel_rate
    labor_cost = concrete * rates.concrete_labor_rate + steel_weight * rates.steel_labor_rate

    logger.debug(
        f"Project totals ({method.value}): {len(rows)} members, "
        f"{concrete:.3f} m³ concrete, {steel_weight:.2f} kg steel"
    )

    return ProjectTotals(
        concrete_volume=concrete,
        steel_area=steel_area,
        steel_weight=steel_weight,
        material_cost=material_cost,
        labor_cost=labor_cost,
        grand_total=material_cost + labor_cost,
        method=method,
        members=rows
    )
