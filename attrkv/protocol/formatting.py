"""
Value Formatting Module

Renders typed attribute values for display.

Numbers:
    whole numbers  -> one decimal place     (30     -> "30.0")
    anything else  -> two decimal places    (30.125 -> "30.13")

The two-decimal case rounds half-up (away from zero) on the shortest
decimal representation of the float, so ``2.675`` renders as ``"2.68"``
even though the nearest binary double is slightly below 2.675.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from ..config.settings import settings
from ..store.values import AttributeType, AttributeValue, is_whole_number

_CENTS = Decimal("0.01")


def format_number(number: float) -> str:
    """Render a float with one decimal if whole, else two (half-up)."""
    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if is_whole_number(number):
        return f"{number:.1f}"
    rounded = Decimal(repr(number)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return format(rounded, "f")


def format_value(value: AttributeValue) -> str:
    """Render an AttributeValue as display text."""
    if value.type is AttributeType.NUMBER:
        return format_number(value.value)
    if value.type is AttributeType.BOOLEAN:
        return "true" if value.value else "false"
    if value.type is AttributeType.STRING:
        return value.value
    raise TypeError(f"unhandled attribute type: {value.type!r}")


def format_entry(entry: Mapping[str, AttributeValue]) -> str:
    """
    Render an Entry as ``name: value`` pairs sorted by attribute name.

    Example:
        {"y": true, "x": 1.0}  ->  "x: 1.0, y: true"
    """
    return settings.FIELD_SEPARATOR.join(
        f"{name}: {format_value(entry[name])}" for name in sorted(entry)
    )
