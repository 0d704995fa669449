"""
Decimal Utilities
jtbd_readiness/scoring/utils.py

Provides precision-safe decimal math for force scoring.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from jtbd_readiness.models.enumerations import StrengthLabel

FOUR_PLACES = Decimal("0.0001")


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def mean(values: List[Decimal]) -> Decimal:
    """
    Arithmetic mean quantized to 4 places.

    Returns Decimal("0") for an empty list (never NaN).
    """
    if not values:
        return Decimal("0")
    return (sum(values) / Decimal(len(values))).quantize(
        FOUR_PLACES, rounding=ROUND_HALF_UP
    )


def population_std_dev(values: List[Decimal]) -> Decimal:
    """
    Population standard deviation.

    Formula: sqrt(Σ(value_i - mean)² / n)
    """
    if not values:
        return Decimal("0")
    m = sum(values) / Decimal(len(values))
    variance = sum((v - m) ** 2 for v in values) / Decimal(len(values))

    # Decimal-safe square root via float conversion
    std = Decimal(str(math.sqrt(float(variance))))
    return std.quantize(FOUR_PLACES, rounding=ROUND_HALF_UP)


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def rescale(value: Decimal, from_max: int, to_max: int) -> Decimal:
    """Linear rescale from [0, from_max] to [0, to_max], quantized to 4 places."""
    return (value * Decimal(to_max) / Decimal(from_max)).quantize(
        FOUR_PLACES, rounding=ROUND_HALF_UP
    )


def strength_label(average_on_five: Decimal, count: int) -> StrengthLabel:
    """
    Label a force average expressed on the 0-5 scale.

        >= 4.5 very_strong, >= 3.5 strong, >= 2.5 moderate, else weak
    """
    if count == 0:
        return StrengthLabel.NONE
    if average_on_five >= Decimal("4.5"):
        return StrengthLabel.VERY_STRONG
    if average_on_five >= Decimal("3.5"):
        return StrengthLabel.STRONG
    if average_on_five >= Decimal("2.5"):
        return StrengthLabel.MODERATE
    return StrengthLabel.WEAK
