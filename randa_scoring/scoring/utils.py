"""
Decimal Utilities
randa_scoring/scoring/utils.py

Precision-safe decimal math and lenient input parsing for scoring calculations.
All rounding is half away from zero (ROUND_HALF_UP on Decimal).
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Iterable, Optional

TWO_PLACES = Decimal("0.01")
ONE_PLACE = Decimal("0.1")
WHOLE = Decimal("1")


def to_decimal(value: Any) -> Decimal:
    """Convert an int/float/Decimal to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: Any, exp: Decimal) -> Decimal:
    """
    Round half away from zero to the exponent of exp.

    Working precision grows with the magnitude of value, so a 1e30 weight
    rounds like any other number instead of raising InvalidOperation.
    """
    d = to_decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() - exp.as_tuple().exponent + 2)
        return d.quantize(exp, rounding=ROUND_HALF_UP)


def round2(value: Any) -> Decimal:
    """Round to 2 decimal places, half away from zero."""
    return quantize(value, TWO_PLACES)


def pct(fraction: Any) -> Decimal:
    """
    Express a 0-1 fraction as a percentage rounded to one decimal place.

    >>> pct(Decimal("0.75"))
    Decimal('75.0')
    """
    return quantize(to_decimal(fraction) * 100, ONE_PLACE)


def round_whole(value: Any) -> int:
    """Round to the nearest whole number, half away from zero."""
    return int(quantize(value, WHOLE))


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("1"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def dsum(values: Iterable[Any]) -> Decimal:
    """Sum values as Decimals (empty sum is Decimal('0'))."""
    total = Decimal("0")
    for v in values:
        total += to_decimal(v)
    return total


# ---------------------------------------------------------------------------
# Lenient parsing: malformed input degrades to a default, never raises
# ---------------------------------------------------------------------------

def parse_num(value: Any, fallback: float = 0.0) -> float:
    """Parse a number from user input; unparseable or non-finite input yields fallback."""
    if value is None or isinstance(value, bool):
        return fallback
    try:
        num = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(num):
        return fallback
    return num


def parse_weight(value: Any) -> float:
    """Parse a percentage weight. Negative weights are clamped to 0."""
    return max(0.0, parse_num(value))


def parse_level(value: Any) -> Optional[int]:
    """
    Parse an element level (1-5).

    Empty, non-numeric, fractional or out-of-range input means "unset".
    """
    num = parse_num(value, fallback=math.nan)
    if math.isnan(num) or num != int(num):
        return None
    level = int(num)
    if 1 <= level <= 5:
        return level
    return None
