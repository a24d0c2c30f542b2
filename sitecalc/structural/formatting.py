"""
Display formatting for estimator results.
Currency uses Indian digit grouping (1,23,456).
"""

import math


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(abs(value) * factor + 0.5) / factor * (1 if value >= 0 else -1)


def group_indian(value: int) -> str:
    """Group digits the Indian way: last three, then pairs."""
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


def format_inr(amount: float, symbol: str = "₹") -> str:
    """Currency, whole rupees: 123456.7 -> '₹ 1,23,457'."""
    if not math.isfinite(amount):
        amount = 0.0
    return f"{symbol} {group_indian(int(_round_half_up(amount)))}"


def format_volume(volume_m3: float) -> str:
    return f"{volume_m3:.3f} m³"


def format_area(area_mm2: float) -> str:
    return f"{area_mm2:.0f} mm²"


def format_length(length_m: float) -> str:
    return f"{length_m:.3f} m"


def format_weight(weight_kg: float, decimals: int = 2) -> str:
    return f"{weight_kg:.{decimals}f} kg"
