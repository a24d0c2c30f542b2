"""
Input Parsing Utilities
Converts form/CLI text into numbers the estimators can use:
- Decimal entries (e.g., "0.23", "12mm", " 8000 ")
- Bar counts (e.g., "4", "4 nos")
- Site rebar callouts (e.g., "4Y16", "Y12@150", "T10@200 B/W")

Anything that does not parse is read as 0, which the estimators treat
as incomplete input.
"""

import math
import re
from typing import Dict, Optional, Union

Number = Union[int, float]

# Leading decimal, same prefix rule a browser number field applies
_NUMBER_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')
_INTEGER_PREFIX = re.compile(r'^\s*([+-]?\d+)')


def parse_number(value: Union[str, Number, None]) -> float:
    """
    Parse a decimal from form input.

    Examples:
        "0.23" -> 0.23
        "12mm" -> 12.0
        "" / "abc" / None -> 0.0

    Returns:
        Parsed value, or 0.0 if the input is empty, non-numeric or not finite
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        result = float(value)
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if not match:
            return 0.0
        result = float(match.group(1))

    if not math.isfinite(result):
        return 0.0
    return result


def parse_count(value: Union[str, Number, None]) -> int:
    """
    Parse an integer count from form input.

    Decimal entries are truncated ("4.7" -> 4); invalid input reads as 0.
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return 0
        return int(value)

    match = _INTEGER_PREFIX.match(str(value))
    if not match:
        return 0
    return int(match.group(1))


def mm_to_m(mm: float) -> float:
    """Millimetres to metres."""
    return mm / 1000


def m_to_mm(m: float) -> float:
    """Metres to millimetres."""
    return m * 1000


def parse_rebar_callout(text: str) -> Optional[Dict]:
    """
    Parse a rebar callout as written on drawings and site sketches.

    Patterns:
    - "4Y16" -> 4 nos Y16
    - "Y12@150" -> Y12 at 150mm c/c
    - "8-Y12@150 B/W" -> 8 nos Y12 at 150mm both ways

    Returns:
        Dict with any of 'count', 'diameter', 'spacing', 'both_ways',
        or None if nothing was recognised
    """
    if not text:
        return None

    result = {}

    # Pattern: NYdd or N-Ydd (also T/# for TMT marks)
    bar_count = re.search(r'(\d+)\s*-?\s*[YTyt#]\s*(\d+)', text)
    if bar_count:
        result['count'] = int(bar_count.group(1))
        result['diameter'] = int(bar_count.group(2))

    # Pattern: Ydd@sss
    spacing = re.search(r'[YTyt#]\s*(\d+)\s*@\s*(\d+)', text)
    if spacing:
        result['diameter'] = int(spacing.group(1))
        result['spacing'] = int(spacing.group(2))

    # Both ways indicator
    lowered = text.lower()
    if 'b/w' in lowered or 'both' in lowered:
        result['both_ways'] = True

    return result if result else None
